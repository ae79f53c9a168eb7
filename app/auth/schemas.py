from pydantic import BaseModel

from app.core.enums import UserRole


class CurrentUser(BaseModel):
    """Caller identity resolved from the bearer token."""

    id: str
    role: UserRole
