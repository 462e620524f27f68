"""
Password Policy Value Object

Immutable, typed view over a configured set of password rules. A policy is
built once at configuration load and shared read-only between concurrent
validations.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from passcheck.core.config import parse_boolean, parse_integer, parse_list
from passcheck.core.errors import ConfigurationError
from passcheck.core.logging import get_logger
from passcheck.modules.identity.domain.enums import (
    ADComplexityLevel,
    PasswordRule,
    RuleType,
)

from .base import ValueObject

if TYPE_CHECKING:
    from passcheck.modules.identity.domain.interfaces.services import IMacroExpander

    from .user_context import UserContext

logger = get_logger(__name__)


def _coerce(rule: PasswordRule, value: Any) -> Any:
    """Convert a raw configured value to the rule's type."""
    if value is None:
        return rule.default
    if isinstance(value, Enum):
        value = value.value

    key = rule.wire_name
    if rule.rule_type == RuleType.INT:
        return parse_integer(value, key)
    if rule.rule_type == RuleType.BOOLEAN:
        return parse_boolean(value, key)
    if rule.rule_type == RuleType.LIST:
        return tuple(parse_list(value, key))
    return str(value).strip()


def split_attribute_threshold(entry: str) -> tuple[str, int]:
    """
    Split an ``attrName:threshold`` entry.

    Missing or non-numeric thresholds read as 0.
    """
    name, _, threshold = entry.partition(":")
    try:
        return name.strip(), max(int(threshold.strip()), 0)
    except ValueError:
        return name.strip(), 0


def compile_patterns(patterns: list[str], rule: PasswordRule) -> list[re.Pattern]:
    """Compile patterns, logging and skipping any that are invalid."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.warning(
                "Skipping invalid pattern",
                rule=rule.wire_name,
                pattern=pattern,
                error=str(e),
            )
    return compiled


@dataclass(frozen=True)
class PasswordPolicy(ValueObject):
    """
    Password policy rules.

    Rules absent from the configured mapping take their catalogue default,
    so every accessor always returns a value.
    """

    rules: Mapping[PasswordRule, Any] = field(default_factory=dict)
    name: str = "default"

    def __post_init__(self):
        """Coerce values and precompute derived fields."""
        resolved = {rule: rule.default for rule in PasswordRule}
        for key, value in (self.rules or {}).items():
            try:
                rule = PasswordRule.from_key(key)
            except KeyError as e:
                raise ConfigurationError(
                    f"Unknown password rule: {key!r}", config_key=str(key)
                ) from e
            resolved[rule] = _coerce(rule, value)

        object.__setattr__(self, "rules", MappingProxyType(resolved))

        level = str(resolved[PasswordRule.AD_COMPLEXITY_LEVEL] or "NONE").upper()
        try:
            ad_level = ADComplexityLevel(level)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid AD complexity level: {level!r}",
                config_key=PasswordRule.AD_COMPLEXITY_LEVEL.wire_name,
            ) from e
        object.__setattr__(self, "_ad_complexity_level", ad_level)
        object.__setattr__(
            self,
            "_char_group_patterns",
            tuple(
                compile_patterns(
                    self.read_list(PasswordRule.CHAR_GROUPS_VALUES),
                    PasswordRule.CHAR_GROUPS_VALUES,
                )
            ),
        )

    def __hash__(self) -> int:
        return hash((self.name, tuple((rule.name, value) for rule, value in self.rules.items())))

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any] | None, name: str = "default") -> "PasswordPolicy":
        """
        Build a policy from rule members or wire names.

        String values are coerced the same way environment settings are:
        "true"/"false" for booleans, digits for integers and newline
        separated text for lists.
        """
        return cls(rules=dict(mapping or {}), name=name)

    def with_rules(self, **overrides: Any) -> "PasswordPolicy":
        """Copy of this policy with rules replaced by member name or wire name."""
        rules = dict(self.rules)
        for key, value in overrides.items():
            rules[key] = value
        return PasswordPolicy(rules=rules, name=self.name)

    # Typed accessors

    def read_int(self, rule: PasswordRule) -> int:
        return int(self.rules[rule])

    def read_bool(self, rule: PasswordRule) -> bool:
        return bool(self.rules[rule])

    def read_text(self, rule: PasswordRule) -> str:
        return str(self.rules[rule])

    def read_list(self, rule: PasswordRule) -> list[str]:
        return list(self.rules[rule])

    @property
    def enabled(self) -> bool:
        return self.read_bool(PasswordRule.POLICY_ENABLED)

    @property
    def ad_complexity_level(self) -> ADComplexityLevel:
        return self._ad_complexity_level

    @property
    def ad_complexity_max_violations(self) -> int:
        return self.read_int(PasswordRule.AD_COMPLEXITY_MAX_VIOLATIONS)

    @property
    def char_group_patterns(self) -> list[re.Pattern]:
        return list(self._char_group_patterns)

    def disallowed_values(self) -> list[str]:
        """Configured disallowed values, blanks dropped and duplicates removed."""
        values = []
        for value in self.read_list(PasswordRule.DISALLOWED_VALUES):
            value = value.strip()
            if value and value not in values:
                values.append(value)
        return values

    def disallowed_attributes(self, keep_thresholds: bool = False) -> list[str]:
        """
        Configured disallowed attributes.

        Args:
            keep_thresholds: Return raw ``attrName:threshold`` entries instead
                of bare attribute names
        """
        entries = [
            entry.strip()
            for entry in self.read_list(PasswordRule.DISALLOWED_ATTRIBUTES)
            if entry.strip()
        ]
        if keep_thresholds:
            return entries
        return [split_attribute_threshold(entry)[0] for entry in entries]

    def regex_match(
        self,
        expander: "IMacroExpander | None" = None,
        user_context: "UserContext | None" = None,
    ) -> list[re.Pattern]:
        """Must-match patterns, macro expanded then compiled."""
        return self._expanded_patterns(PasswordRule.REGEX_MATCH, expander, user_context)

    def regex_no_match(
        self,
        expander: "IMacroExpander | None" = None,
        user_context: "UserContext | None" = None,
    ) -> list[re.Pattern]:
        """Must-not-match patterns, macro expanded then compiled."""
        return self._expanded_patterns(PasswordRule.REGEX_NO_MATCH, expander, user_context)

    def _expanded_patterns(
        self,
        rule: PasswordRule,
        expander: "IMacroExpander | None",
        user_context: "UserContext | None",
    ) -> list[re.Pattern]:
        patterns = self.read_list(rule)
        if expander is not None:
            patterns = [expander.expand(pattern, user_context) for pattern in patterns]
        return compile_patterns([p for p in patterns if p], rule)

    def to_rule_map(self) -> dict[str, Any]:
        """Flatten to ``{wire name: value}`` for the external rule service."""
        result = {}
        for rule, value in self.rules.items():
            if rule.rule_type == RuleType.LIST:
                value = list(value)
            result[rule.wire_name] = value
        return result

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "rules": self.to_rule_map()}
