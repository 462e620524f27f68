"""
External rule service DTOs.

Wire models for the JSON request sent to the external password rule
service and the verdict it returns.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from passcheck.modules.identity.domain.value_objects import PasswordPolicy, UserContext


class PublicUserInfo(BaseModel):
    """User information safe to share with the external service."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userID")
    user_dn: str | None = Field(None, alias="userDN")
    email: str | None = Field(None, alias="userEmailAddress")
    attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("attributes")
    @classmethod
    def drop_password_attributes(cls, value: dict[str, str]) -> dict[str, str]:
        return {k: v for k, v in value.items() if "password" not in k.lower()}

    @classmethod
    def from_user_context(
        cls, user_context: UserContext, attribute_names: Iterable[str] = ()
    ) -> "PublicUserInfo":
        return cls(
            user_id=user_context.user_id,
            user_dn=user_context.user_dn,
            email=user_context.email,
            attributes=user_context.public_attributes(attribute_names),
        )


class ExternalRuleRequest(BaseModel):
    """Request body for the external rule service."""

    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(...)
    policy: dict[str, Any] = Field(default_factory=dict)
    user_info: PublicUserInfo | None = Field(None, alias="userInfo")

    @classmethod
    def build(
        cls,
        policy: PasswordPolicy,
        password: str,
        user_context: UserContext | None = None,
        attribute_names: Iterable[str] = (),
    ) -> "ExternalRuleRequest":
        user_info = None
        if user_context is not None:
            user_info = PublicUserInfo.from_user_context(user_context, attribute_names)
        return cls(password=password, policy=policy.to_rule_map(), user_info=user_info)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class ExternalRuleResponse(BaseModel):
    """Verdict returned by the external rule service.

    A missing or false ``error`` means the password is accepted. String
    flags are read the way "true" is parsed anywhere else: case
    insensitive, everything else is false.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    error: bool = Field(False)
    error_message: str | None = Field(None, alias="errorMessage")

    @field_validator("error", mode="before")
    @classmethod
    def parse_error_flag(cls, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    @field_validator("error_message", mode="before")
    @classmethod
    def stringify_message(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
