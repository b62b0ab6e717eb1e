"""Design schema definitions."""

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import Field, StringConstraints

from models.enums import DesignStatus
from schemas.common import CamelModel, Url

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]

SortBy = Literal["popular", "newest", "price-low", "price-high", "rating"]


class CreateDesignRequest(CamelModel):
    title: Title
    description: Optional[Description] = None
    category: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    price: float = Field(ge=1)
    file_url: Url
    watermarked_preview_url: Url


class UpdateDesignRequest(CamelModel):
    title: Optional[Title] = None
    description: Optional[Description] = None
    price: Optional[float] = Field(default=None, ge=1)


class ModerateDesignRequest(CamelModel):
    status: Literal["APPROVED", "REJECTED", "FLAGGED"]
    reason: Optional[str] = None


class DesignerBrief(CamelModel):
    id: int
    name: str
    rating: float


class DesignerDetailBrief(DesignerBrief):
    bio: Optional[str] = None


class DesignSummary(CamelModel):
    """Public listing entry; never exposes the purchasable file URL."""

    id: int
    title: str
    description: Optional[str] = None
    category: str
    price: float
    watermarked_preview_url: str
    designer: DesignerBrief
    created_at: datetime


class DesignDetail(DesignSummary):
    status: DesignStatus
    designer: DesignerDetailBrief


class DesignRecord(CamelModel):
    """Full design row as seen by its owner and by admins."""

    id: int
    designer_id: int
    title: str
    description: Optional[str] = None
    category: str
    price: float
    file_url: str
    watermarked_preview_url: str
    status: DesignStatus
    created_at: datetime
    updated_at: datetime


class DesignOwner(CamelModel):
    id: int
    name: str
    email: str


class AdminDesign(DesignRecord):
    designer: DesignOwner


class DesignCard(CamelModel):
    id: int
    title: str
    price: float
    watermarked_preview_url: str


class PublicDesigner(CamelModel):
    id: int
    name: str
    bio: Optional[str] = None
    portfolio_link: Optional[str] = None
    rating: float
    member_since: datetime
    designs: List[DesignCard]
