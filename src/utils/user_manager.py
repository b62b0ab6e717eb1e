"""User management utilities.

This module provides account registration, credential checks, profile lookup
and the admin operations on users.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from core.exceptions import AuthenticationError, ConflictError, NotFoundError
from core.security import hash_password, verify_password
from models import BuyerModel, DesignerModel, Role, UserModel, UserStatus
from schemas.common import Pagination
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class UserManager:
    """Manages users and their role profiles using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _create_user(self, user: UserModel) -> UserModel:
        """Persist a user together with its profile in one commit.

        Raises:
            ConflictError: If the email is already registered.
        """
        existing = self.db.query(UserModel).filter(UserModel.email == user.email).first()
        if existing:
            raise ConflictError("User already exists")

        # Two concurrent registrations can both pass the check above; the
        # unique constraint on email catches the loser.
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("User already exists") from e

        logger.info("Created %s user %s (id=%s)", user.role.value, user.email, user.id)
        return user

    def register_buyer(self, name: str, email: str, password: str) -> UserModel:
        """Create a BUYER account with its buyer profile.

        Args:
            name: Display name.
            email: Unique email address.
            password: Plain text password.

        Returns:
            Created UserModel with ``buyer`` populated.
        """
        user = UserModel(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role.BUYER,
            buyer=BuyerModel(),
        )
        return self._create_user(user)

    def register_designer(
        self,
        name: str,
        email: str,
        password: str,
        bio: Optional[str] = None,
        portfolio_link: Optional[str] = None,
    ) -> UserModel:
        """Create a DESIGNER account with its designer profile.

        Args:
            name: Display name.
            email: Unique email address.
            password: Plain text password.
            bio: Optional biography.
            portfolio_link: Optional portfolio URL.

        Returns:
            Created UserModel with ``designer`` populated.
        """
        user = UserModel(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role.DESIGNER,
            designer=DesignerModel(bio=bio or None, portfolio_link=portfolio_link or None),
        )
        return self._create_user(user)

    def create_admin(self, name: str, email: str, password: str) -> UserModel:
        user = UserModel(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role.ADMIN,
            verified=True,
        )
        return self._create_user(user)

    def authenticate(self, email: str, password: str) -> UserModel:
        """Check credentials.

        Unknown email and wrong password fail with the same message.

        Args:
            email: Email address.
            password: Plain text password.

        Returns:
            The matching UserModel.

        Raises:
            AuthenticationError: If the credentials do not match.
        """
        user = self.db.query(UserModel).filter(UserModel.email == email).first()
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    def get_user(self, user_id: int) -> UserModel:
        """Get a user by id.

        Raises:
            NotFoundError: If no such user exists.
        """
        user = (
            self.db.query(UserModel)
            .options(selectinload(UserModel.designer), selectinload(UserModel.buyer))
            .filter(UserModel.id == user_id)
            .first()
        )
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_designer(self, designer_id: int) -> DesignerModel:
        designer = (
            self.db.query(DesignerModel)
            .options(selectinload(DesignerModel.user))
            .filter(DesignerModel.id == designer_id)
            .first()
        )
        if designer is None:
            raise NotFoundError("Designer not found")
        return designer

    def get_designer_for_user(self, user_id: int) -> DesignerModel:
        """Get the designer profile owned by a user.

        Raises:
            NotFoundError: If the user has no designer profile.
        """
        designer = (
            self.db.query(DesignerModel).filter(DesignerModel.user_id == user_id).first()
        )
        if designer is None:
            raise NotFoundError("Designer profile not found")
        return designer

    def list_users(
        self,
        params: PageParams,
        role: Optional[Role] = None,
        status: Optional[UserStatus] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[UserModel], Pagination]:
        """List users, newest first.

        Args:
            params: Page parameters.
            role: Exact role filter.
            status: Exact status filter.
            search: Case-insensitive substring matched against name or email.

        Returns:
            Tuple of (users on the page, pagination metadata).
        """
        query = self.db.query(UserModel).options(
            selectinload(UserModel.designer), selectinload(UserModel.buyer)
        )
        if role:
            query = query.filter(UserModel.role == role)
        if status:
            query = query.filter(UserModel.status == status)
        if search:
            query = query.filter(
                or_(
                    UserModel.name.icontains(search, autoescape=True),
                    UserModel.email.icontains(search, autoescape=True),
                )
            )
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        return paginate(query, params)

    def update_status(
        self, user_id: int, status: UserStatus, reason: Optional[str] = None
    ) -> UserModel:
        user = self.get_user(user_id)
        user.status = status
        self.db.commit()
        self.db.refresh(user)
        logger.info(
            "User %s status set to %s (reason: %s)", user_id, status.value, reason or "-"
        )
        return user

    def delete_user(self, user_id: int) -> None:
        """Delete a user and everything its profile owns.

        Raises:
            NotFoundError: If no such user exists.
        """
        user = self.get_user(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user %s", user_id)
