"""Design catalogue routes.

Public browsing only ever returns APPROVED designs. Creating, updating and
deleting require a DESIGNER token, and updates/deletes only succeed on the
caller's own designs.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api.routes.auth import require_roles
from core.dependencies import DesignManagerDep
from core.security import Identity
from models import DesignModel, Role
from schemas.design import (
    CreateDesignRequest,
    DesignDetail,
    DesignerBrief,
    DesignerDetailBrief,
    DesignRecord,
    DesignSummary,
    SortBy,
    UpdateDesignRequest,
)
from utils.pagination import PageParams

router = APIRouter(prefix="/api/designs", tags=["Designs"])

require_designer = require_roles(Role.DESIGNER)


def _build_summary(model: DesignModel) -> DesignSummary:
    return DesignSummary(
        id=model.id,
        title=model.title,
        description=model.description,
        category=model.category,
        price=model.price,
        watermarked_preview_url=model.watermarked_preview_url,
        designer=DesignerBrief(
            id=model.designer.id,
            name=model.designer.user.name,
            rating=model.designer.rating,
        ),
        created_at=model.created_at,
    )


def _build_detail(model: DesignModel) -> DesignDetail:
    return DesignDetail(
        id=model.id,
        title=model.title,
        description=model.description,
        category=model.category,
        price=model.price,
        watermarked_preview_url=model.watermarked_preview_url,
        status=model.status,
        designer=DesignerDetailBrief(
            id=model.designer.id,
            name=model.designer.user.name,
            rating=model.designer.rating,
            bio=model.designer.bio,
        ),
        created_at=model.created_at,
    )


@router.get("", summary="Browse approved designs")
def list_designs(
    design_manager: DesignManagerDep,
    params: PageParams = Depends(),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: Optional[SortBy] = Query(None, alias="sortBy"),
) -> dict:
    """List approved designs with filters and pagination.

    Args:
        design_manager: Injected DesignManager instance.
        params: Page parameters.
        category: Exact category filter.
        search: Free-text filter over title and description.
        sort_by: newest (default), price-low, price-high, popular or rating.

    Returns:
        Dictionary with ``designs`` and ``pagination``.
    """
    designs, pagination = design_manager.list_public(
        params,
        category=category.strip() if category else None,
        search=search.strip() if search else None,
        sort_by=sort_by,
    )
    return {
        "success": True,
        "designs": [_build_summary(d).dump() for d in designs],
        "pagination": pagination.dump(),
    }


@router.get("/{design_id}", summary="Get an approved design")
def get_design(design_id: int, design_manager: DesignManagerDep) -> dict:
    design = design_manager.get_public(design_id)
    return {"success": True, "design": _build_detail(design).dump()}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a design")
def create_design(
    req: CreateDesignRequest,
    design_manager: DesignManagerDep,
    identity: Identity = Depends(require_designer),
) -> dict:
    """Create a design awaiting moderation.

    Args:
        req: Design fields.
        design_manager: Injected DesignManager instance.
        identity: Authenticated designer.

    Returns:
        Dictionary with the created design, status PENDING.
    """
    design = design_manager.create(identity.user_id, req)
    return {"success": True, "design": DesignRecord.model_validate(design).dump()}


@router.put("/{design_id}", summary="Update an owned design")
def update_design(
    design_id: int,
    req: UpdateDesignRequest,
    design_manager: DesignManagerDep,
    identity: Identity = Depends(require_designer),
) -> dict:
    """Update title, description or price of one of the caller's designs.

    Returns 404 when the design does not exist and 403 when it belongs to
    another designer.
    """
    design = design_manager.update(identity.user_id, design_id, req)
    return {"success": True, "design": DesignRecord.model_validate(design).dump()}


@router.delete("/{design_id}", summary="Delete an owned design")
def delete_design(
    design_id: int,
    design_manager: DesignManagerDep,
    identity: Identity = Depends(require_designer),
) -> dict:
    design_manager.delete(identity.user_id, design_id)
    return {"success": True, "message": "Design deleted successfully"}
