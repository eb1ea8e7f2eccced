"""User identity models.

Users themselves are managed outside taskflow; the task core only needs the
identity carried by a verified token.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthenticatedUser(BaseModel):
    """Identity extracted from a verified authentication token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(..., alias="userId", min_length=1, description="Unique user ID")
    email: str = Field(..., description="Email address the token was issued for")
