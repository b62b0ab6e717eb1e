"""Authentication routes.

This module handles HTTP endpoints for registration and login, and provides
the authentication and authorization dependencies used by the other routers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.dependencies import TokenServiceDep, UserManagerDep
from core.exceptions import AuthenticationError, AuthorizationError, InvalidTokenError
from core.security import Identity, TokenService
from models import Role, UserModel
from schemas.user import (
    DesignerProfile,
    LoginRequest,
    RegisterBuyerRequest,
    RegisterDesignerRequest,
    UserProfile,
    UserPublic,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# HTTP Bearer token security; a missing header is reported by us, not FastAPI
security = HTTPBearer(auto_error=False)


def get_current_identity(
    request: Request,
    token_service: TokenServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Verify the bearer token and attach the identity to the request.

    Malformed, tampered and expired tokens all produce the same message.

    Args:
        request: Current request; ``request.state.identity`` is set on success.
        token_service: Injected TokenService.
        credentials: HTTP Bearer token credentials, if any.

    Returns:
        The caller's Identity.

    Raises:
        AuthenticationError: If the token is missing or fails verification.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")
    try:
        identity = token_service.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("Rejected token: %s", e)
        raise AuthenticationError("Invalid or expired token")
    request.state.identity = identity
    return identity


def require_roles(*roles: Role):
    """Build a dependency that admits only identities holding one of ``roles``.

    Args:
        *roles: Allowed roles.

    Returns:
        Dependency returning the authenticated Identity.
    """
    allowed = frozenset(roles)

    def _check(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            raise AuthorizationError("Forbidden")
        return identity

    return _check


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Admit ADMIN identities only; applied to the whole admin router."""
    if identity.role is not Role.ADMIN:
        raise AuthorizationError("Admin access required")
    return identity


def _auth_payload(user: UserModel, token_service: TokenService) -> dict:
    token = token_service.issue(Identity(user_id=user.id, role=user.role))
    return {
        "success": True,
        "user": UserPublic.model_validate(user).dump(),
        "token": token,
    }


@router.post("/register/buyer", status_code=status.HTTP_201_CREATED, summary="Register a buyer")
def register_buyer(
    req: RegisterBuyerRequest,
    user_manager: UserManagerDep,
    token_service: TokenServiceDep,
) -> dict:
    """Register a new buyer account.

    Args:
        req: Registration request with name, email and password.
        user_manager: Injected UserManager instance.
        token_service: Injected TokenService.

    Returns:
        Dictionary with the created user and a session token.

    Raises:
        ConflictError: If the email is already registered.
    """
    user = user_manager.register_buyer(req.name, req.email, req.password)
    return _auth_payload(user, token_service)


@router.post(
    "/register/designer",
    status_code=status.HTTP_201_CREATED,
    summary="Register a designer",
)
def register_designer(
    req: RegisterDesignerRequest,
    user_manager: UserManagerDep,
    token_service: TokenServiceDep,
) -> dict:
    """Register a new designer account.

    Args:
        req: Registration request; ``bio`` and ``portfolioLink`` are optional.
        user_manager: Injected UserManager instance.
        token_service: Injected TokenService.

    Returns:
        Dictionary with the created user, designer profile and a session token.

    Raises:
        ConflictError: If the email is already registered.
    """
    user = user_manager.register_designer(
        req.name,
        req.email,
        req.password,
        bio=req.bio,
        portfolio_link=req.portfolio_link,
    )
    payload = _auth_payload(user, token_service)
    payload["designer"] = DesignerProfile.model_validate(user.designer).dump()
    return payload


@router.post("/login", summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
    token_service: TokenServiceDep,
) -> dict:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        user_manager: Injected UserManager instance.
        token_service: Injected TokenService.

    Returns:
        Dictionary with user information and a session token.

    Raises:
        AuthenticationError: If the credentials do not match; the message does
            not say which part was wrong.
    """
    user = user_manager.authenticate(req.email, req.password)
    return _auth_payload(user, token_service)


@router.get("/me", summary="Current user")
def get_current_user_info(
    user_manager: UserManagerDep,
    identity: Identity = Depends(get_current_identity),
) -> dict:
    user = user_manager.get_user(identity.user_id)
    return {"success": True, "user": UserProfile.model_validate(user).dump()}
