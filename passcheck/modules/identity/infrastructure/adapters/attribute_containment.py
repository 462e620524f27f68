"""Default attribute containment comparison."""

from passcheck.modules.identity.domain.rules import contains_disallowed_value


class SubstringAttributeContainment:
    """Case-insensitive substring comparison with an optional slice threshold."""

    def contains_disallowed_value(self, password: str, value: str, threshold: int) -> bool:
        return contains_disallowed_value(password, value, threshold)
