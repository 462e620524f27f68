"""Identity application services."""

from .external_rule_invoker import ExternalRuleInvoker, IExternalRuleTransport

__all__ = ["ExternalRuleInvoker", "IExternalRuleTransport"]
