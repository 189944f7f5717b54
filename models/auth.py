from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------
# LOGIN REQUEST (POST /auth/login on the backend)
# -----------------------------------------------------
class LoginRequest(BaseModel):
    email: str
    password: str


# -----------------------------------------------------
# BUILDING (as returned alongside the user at login)
# -----------------------------------------------------
class BuildingRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    api_subdomain: Optional[str] = None
    is_active: bool = True
    # Membership role for this building, when the backend sends one
    role: Optional[str] = None


# -----------------------------------------------------
# USER (backend identity)
# -----------------------------------------------------
class UserRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_name: Optional[str] = None
    is_admin: bool = False
    is_active: bool = True
    role: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.preferred_name or self.first_name or self.email


# -----------------------------------------------------
# LOGIN RESULT
# -----------------------------------------------------
class LoginResult(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user: UserRead
    buildings: List[BuildingRead] = Field(default_factory=list)
