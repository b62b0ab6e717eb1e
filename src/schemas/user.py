"""User and authentication schema definitions."""

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import EmailStr, Field, StringConstraints

from models.enums import Role, UserStatus
from schemas.common import CamelModel, Url

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RegisterBuyerRequest(CamelModel):
    name: Name
    email: EmailStr
    password: str = Field(min_length=8, description="At least 8 characters.")


class RegisterDesignerRequest(RegisterBuyerRequest):
    bio: Optional[Annotated[str, StringConstraints(strip_whitespace=True)]] = None
    portfolio_link: Optional[Url] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserPublic(CamelModel):
    """User fields returned alongside a token."""

    id: int
    name: str
    email: str
    role: Role


class UserProfile(UserPublic):
    created_at: datetime


class DesignerProfile(CamelModel):
    id: int
    user_id: int
    bio: Optional[str] = None
    portfolio_link: Optional[str] = None
    rating: float
    total_earnings: float


class BuyerProfile(CamelModel):
    id: int
    user_id: int
    total_spent: float


class DesignerStats(CamelModel):
    total_earnings: float
    rating: float


class BuyerStats(CamelModel):
    total_spent: float


class AdminUserSummary(UserProfile):
    status: UserStatus
    verified: bool
    designer: Optional[DesignerStats] = None
    buyer: Optional[BuyerStats] = None


class AdminUserDetail(UserProfile):
    status: UserStatus
    verified: bool
    designer: Optional[DesignerProfile] = None
    buyer: Optional[BuyerProfile] = None


class UpdateUserStatusRequest(CamelModel):
    status: Literal["ACTIVE", "SUSPENDED", "BANNED"]
    reason: Optional[str] = None
