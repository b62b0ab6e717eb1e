"""User profile routes."""

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_identity
from core.dependencies import DesignManagerDep, UserManagerDep
from core.security import Identity
from schemas.design import DesignCard, PublicDesigner
from schemas.user import UserProfile

router = APIRouter(prefix="/api/users", tags=["Users"])

PROFILE_DESIGN_COUNT = 10


@router.get("/designers/{designer_id}", summary="Public designer profile")
def get_designer(
    designer_id: int,
    user_manager: UserManagerDep,
    design_manager: DesignManagerDep,
) -> dict:
    """Get a designer's public profile with some of their approved designs.

    Args:
        designer_id: Designer profile id.
        user_manager: Injected UserManager instance.
        design_manager: Injected DesignManager instance.

    Returns:
        Dictionary with the designer profile.
    """
    designer = user_manager.get_designer(designer_id)
    designs = design_manager.list_for_designer(designer.id, limit=PROFILE_DESIGN_COUNT)
    profile = PublicDesigner(
        id=designer.id,
        name=designer.user.name,
        bio=designer.bio,
        portfolio_link=designer.portfolio_link,
        rating=designer.rating,
        member_since=designer.user.created_at,
        designs=[DesignCard.model_validate(d) for d in designs],
    )
    return {"success": True, "designer": profile.dump()}


@router.get("/{user_id}", summary="Get a user")
def get_user(
    user_id: int,
    user_manager: UserManagerDep,
    identity: Identity = Depends(get_current_identity),
) -> dict:
    user = user_manager.get_user(user_id)
    return {"success": True, "user": UserProfile.model_validate(user).dump()}
