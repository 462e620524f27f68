"""
Identity module.

Password policy validation: rule checkers, the validator that runs them,
and the external rule service integration.
"""
