"""
Request Dependencies.

Database session, repository bundle, caller resolution from the bearer token
and the configuration objects services are built with.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from teestore.core.database import get_session
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle, build_repos
from teestore.core.errors import AuthenticationError
from teestore.core.security import decode_access_token
from teestore.payments.razorpay import RazorpayClient, get_razorpay_client
from teestore.server.core.config import PricingConfig, settings

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> RepoBundle:
    return build_repos(session)


def get_pricing() -> PricingConfig:
    return settings.pricing


ReposDep = Annotated[RepoBundle, Depends(get_repos)]
PricingDep = Annotated[PricingConfig, Depends(get_pricing)]
GatewayDep = Annotated[RazorpayClient, Depends(get_razorpay_client)]
Credentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_user(credentials: Credentials, repos: ReposDep) -> Optional[User]:
    """Resolve the caller when a valid token is sent, None for anonymous calls."""
    if credentials is None:
        return None
    try:
        user_id = decode_access_token(credentials.credentials)
    except AuthenticationError as e:
        raise _unauthorized(e.message) from e
    user = await repos.users.get_active(user_id)
    if user is None:
        raise _unauthorized("Account not found or deactivated")
    return user


async def get_current_user(user: Annotated[Optional[User], Depends(get_optional_user)]) -> User:
    if user is None:
        raise _unauthorized("Not authenticated")
    return user


async def get_admin_user(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(get_admin_user)]
