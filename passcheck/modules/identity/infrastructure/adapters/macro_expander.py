"""
User context macro expander.

Supported macros:
- @User:ID@, @User:DN@, @User:Email@
- @LDAP:<attribute>@ for any cached directory attribute

Unknown macros are left untouched; a macro for a value the user does not
have expands to an empty string.
"""

import re

from passcheck.modules.identity.domain.value_objects import UserContext

MACRO_PATTERN = re.compile(r"@(User|LDAP):([^@]+)@")


class UserContextMacroExpander:
    """Expands user macros from a UserContext."""

    def expand(self, template: str, user_context: UserContext | None) -> str:
        if not template or "@" not in template:
            return template

        def replace(match: re.Match) -> str:
            scope, name = match.group(1), match.group(2)
            if scope == "LDAP":
                if user_context is None:
                    return ""
                return user_context.get_attribute(name) or ""
            return self._user_value(name, user_context, match.group(0))

        return MACRO_PATTERN.sub(replace, template)

    def _user_value(self, name: str, user_context: UserContext | None, original: str) -> str:
        fields = {"ID": "user_id", "DN": "user_dn", "Email": "email"}
        if name not in fields:
            return original
        if user_context is None:
            return ""
        return getattr(user_context, fields[name]) or ""
