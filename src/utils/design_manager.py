"""Design catalogue utilities.

Covers the public catalogue (APPROVED designs only), designer-owned
create/update/delete, and admin listing and moderation.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from core.exceptions import AuthorizationError, NotFoundError
from models import DesignerModel, DesignModel, DesignStatus
from schemas.common import Pagination
from schemas.design import CreateDesignRequest, UpdateDesignRequest
from utils.pagination import PageParams, paginate
from utils.transitions import check_design_transition

logger = logging.getLogger(__name__)

DESIGN_NOT_FOUND = "Design not found"

# "popular" and "rating" are accepted but have no ranking data behind them,
# so they fall back to newest first.
_SORT_ORDERS = {
    "newest": (DesignModel.created_at.desc(), DesignModel.id.desc()),
    "price-low": (DesignModel.price.asc(), DesignModel.id.desc()),
    "price-high": (DesignModel.price.desc(), DesignModel.id.desc()),
}


class DesignManager:
    """Manages designs using SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(DesignModel).options(
            selectinload(DesignModel.designer).selectinload(DesignerModel.user)
        )

    def _designer_for_user(self, user_id: int) -> DesignerModel:
        designer = (
            self.db.query(DesignerModel).filter(DesignerModel.user_id == user_id).first()
        )
        if designer is None:
            raise NotFoundError("Designer profile not found")
        return designer

    def _owned_design(self, user_id: int, design_id: int, action: str) -> DesignModel:
        """Resolve a design the caller is about to mutate.

        Existence is checked before ownership, so a missing design is a 404
        even for callers who could never own it.
        """
        designer = self._designer_for_user(user_id)
        design = self.db.get(DesignModel, design_id)
        if design is None:
            raise NotFoundError(DESIGN_NOT_FOUND)
        if design.designer_id != designer.id:
            logger.warning(
                "Designer %s attempted to %s design %s owned by %s",
                designer.id,
                action,
                design_id,
                design.designer_id,
            )
            raise AuthorizationError(f"Not authorized to {action} this design")
        return design

    def list_public(
        self,
        params: PageParams,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> Tuple[List[DesignModel], Pagination]:
        """List approved designs.

        Args:
            params: Page parameters.
            category: Exact category match.
            search: Case-insensitive substring matched against title or
                description.
            sort_by: One of newest, price-low, price-high, popular, rating.

        Returns:
            Tuple of (designs on the page, pagination metadata).
        """
        query = self._query().filter(DesignModel.status == DesignStatus.APPROVED)
        if category:
            query = query.filter(DesignModel.category == category)
        if search:
            query = query.filter(
                or_(
                    DesignModel.title.icontains(search, autoescape=True),
                    DesignModel.description.icontains(search, autoescape=True),
                )
            )
        order = _SORT_ORDERS.get(sort_by or "newest", _SORT_ORDERS["newest"])
        return paginate(query.order_by(*order), params)

    def get_public(self, design_id: int) -> DesignModel:
        """Get an approved design by id.

        Raises:
            NotFoundError: If the design does not exist or is not approved.
        """
        design = (
            self._query()
            .filter(
                DesignModel.id == design_id,
                DesignModel.status == DesignStatus.APPROVED,
            )
            .first()
        )
        if design is None:
            raise NotFoundError(DESIGN_NOT_FOUND)
        return design

    def get(self, design_id: int) -> DesignModel:
        design = self._query().filter(DesignModel.id == design_id).first()
        if design is None:
            raise NotFoundError(DESIGN_NOT_FOUND)
        return design

    def list_for_designer(self, designer_id: int, limit: int = 10) -> List[DesignModel]:
        """Approved designs of one designer, newest first."""
        return (
            self.db.query(DesignModel)
            .filter(
                DesignModel.designer_id == designer_id,
                DesignModel.status == DesignStatus.APPROVED,
            )
            .order_by(DesignModel.created_at.desc(), DesignModel.id.desc())
            .limit(limit)
            .all()
        )

    def create(self, user_id: int, req: CreateDesignRequest) -> DesignModel:
        """Create a PENDING design for the caller's designer profile.

        Args:
            user_id: Authenticated user id.
            req: Validated design fields.

        Returns:
            The created DesignModel.

        Raises:
            NotFoundError: If the caller has no designer profile.
        """
        designer = self._designer_for_user(user_id)
        design = DesignModel(
            designer_id=designer.id,
            title=req.title,
            description=req.description,
            category=req.category,
            price=req.price,
            file_url=req.file_url,
            watermarked_preview_url=req.watermarked_preview_url,
            status=DesignStatus.PENDING,
        )
        self.db.add(design)
        self.db.commit()
        self.db.refresh(design)
        logger.info("Designer %s created design %s", designer.id, design.id)
        return design

    def update(
        self, user_id: int, design_id: int, req: UpdateDesignRequest
    ) -> DesignModel:
        """Update title, description or price of an owned design.

        Raises:
            NotFoundError: If the caller has no designer profile or the design
                does not exist.
            AuthorizationError: If the design belongs to another designer.
        """
        design = self._owned_design(user_id, design_id, "update")
        changes = req.model_dump(exclude_unset=True)
        if changes.get("title"):
            design.title = changes["title"]
        if "description" in changes:
            design.description = changes["description"]
        if changes.get("price") is not None:
            design.price = changes["price"]
        self.db.commit()
        self.db.refresh(design)
        logger.info("Design %s updated by its owner", design_id)
        return design

    def delete(self, user_id: int, design_id: int) -> None:
        design = self._owned_design(user_id, design_id, "delete")
        self.db.delete(design)
        self.db.commit()
        logger.info("Design %s deleted by its owner", design_id)

    def list_admin(
        self,
        params: PageParams,
        status: Optional[DesignStatus] = None,
        category: Optional[str] = None,
        designer_id: Optional[int] = None,
    ) -> Tuple[List[DesignModel], Pagination]:
        """List designs of every status, newest first."""
        query = self._query()
        if status:
            query = query.filter(DesignModel.status == status)
        if category:
            query = query.filter(DesignModel.category == category)
        if designer_id:
            query = query.filter(DesignModel.designer_id == designer_id)
        query = query.order_by(DesignModel.created_at.desc(), DesignModel.id.desc())
        return paginate(query, params)

    def moderate(
        self, design_id: int, status: DesignStatus, reason: Optional[str] = None
    ) -> DesignModel:
        """Set the review status of a design.

        Args:
            design_id: Design to moderate.
            status: Target status.
            reason: Optional note, logged only.

        Returns:
            The updated DesignModel.

        Raises:
            NotFoundError: If the design does not exist.
            ConflictError: If the transition policy refuses the change.
        """
        design = self.get(design_id)
        check_design_transition(design.status, status)
        previous = design.status
        design.status = status
        self.db.commit()
        self.db.refresh(design)
        # TODO: notify the designer once an email sender exists
        logger.info(
            "Design %s moderated %s -> %s (reason: %s)",
            design_id,
            previous.value,
            status.value,
            reason or "-",
        )
        return design

    def delete_any(self, design_id: int) -> None:
        design = self.get(design_id)
        self.db.delete(design)
        self.db.commit()
        logger.info("Design %s deleted by admin", design_id)
