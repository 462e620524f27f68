"""External service clients."""

from .external_rule_client import HttpExternalRuleClient

__all__ = ["HttpExternalRuleClient"]
