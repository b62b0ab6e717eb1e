"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes:
request-scoped managers built around the request's DB session, and the
process-wide settings and token service created by the application factory.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config import Settings
from core.database import get_db
from core.security import TokenService
from utils import admin_manager
from utils import design_manager
from utils import user_manager


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_design_manager(db: Session = Depends(get_db)) -> design_manager.DesignManager:
    """Get DesignManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        DesignManager instance.
    """
    return design_manager.DesignManager(db)


def get_admin_manager(db: Session = Depends(get_db)) -> admin_manager.AdminManager:
    """Get AdminManager instance with request-scoped DB session."""
    return admin_manager.AdminManager(db)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
DesignManagerDep = Annotated[
    design_manager.DesignManager, Depends(get_design_manager)
]
AdminManagerDep = Annotated[admin_manager.AdminManager, Depends(get_admin_manager)]
