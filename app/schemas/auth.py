from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Role(StrEnum):
    """Authorization role carried in the token's ``metadata.role`` claim."""

    USER = "user"
    ADMIN = "admin"


class AuthContext(BaseModel):
    """Identity of the caller, resolved once per request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
