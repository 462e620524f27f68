"""Shared kernel: enums, errors, logging and configuration."""
