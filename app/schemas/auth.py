"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login. Emptiness is checked by the route to return a 400."""

    username: str = Field(default="", max_length=255, description="Username")
    password: str = Field(default="", max_length=255, description="Password")


class LoginResponse(BaseModel):
    """Returned after a successful login; the session itself travels in a cookie."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Login successful"
    role: str
    redirect_url: str = Field(..., alias="redirectUrl")


class MessageResponse(BaseModel):
    """Generic acknowledgement body."""

    success: bool = True
    message: str


class AuthCheckResponse(BaseModel):
    """Session probe for the dashboards. role/username are omitted when anonymous."""

    authenticated: bool
    role: str | None = None
    username: str | None = None


class CurrentUser(BaseModel):
    """Authenticated identity (id, username, role) carried by a session."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
