"""Account Schemas: registration and login bodies, account responses.

Invariants:
    - email: stripped and lowercased, then checked by email-validator (EmailStr);
      malformed domains, dot placement and quoting errors are rejected
    - password: 8-1024 chars, never stripped
    - AccountCreate accepts betaKey or beta_key
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class _Credentials(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=8, max_length=1024)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class AccountCreate(_Credentials):
    """Registration body."""
    beta_key: str = Field(min_length=1, max_length=256)


class SessionCreate(_Credentials):
    """Login body."""


class AccountResponse(BaseModel):
    """Public account data."""
    id: int
    email: str
