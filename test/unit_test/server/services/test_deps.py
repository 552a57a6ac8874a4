"""Unit tests for request dependencies.

Tests verify caller resolution from bearer tokens and the admin guard
without going through the HTTP stack.
"""

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from teestore.core.security import create_access_token
from teestore.server.core.config import settings
from teestore.server.services.deps import (
    CurrentUser,
    get_admin_user,
    get_current_user,
    get_optional_user,
    get_pricing,
    get_repos,
)

pytestmark = pytest.mark.asyncio


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestOptionalUser:
    """Test token based caller resolution."""

    async def test_anonymous_call(self, repos):
        """Test no credentials resolves to no user."""
        assert await get_optional_user(None, repos) is None

    async def test_valid_token(self, repos, customer):
        """Test a valid token resolves to its user."""
        token, _ = create_access_token(customer.id)

        user = await get_optional_user(_credentials(token), repos)

        assert user.id == customer.id

    async def test_garbage_token(self, repos):
        """Test an undecodable token is rejected with a Bearer challenge."""
        with pytest.raises(HTTPException) as exc_info:
            await get_optional_user(_credentials("not-a-token"), repos)

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    async def test_deactivated_user(self, repos, customer):
        """Test a token of a deactivated account is rejected."""
        token, _ = create_access_token(customer.id)
        customer.is_active = False
        await repos.users.update(customer)

        with pytest.raises(HTTPException) as exc_info:
            await get_optional_user(_credentials(token), repos)

        assert exc_info.value.status_code == 401


class TestRequiredUser:
    async def test_current_user_required(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)

        assert exc_info.value.detail == "Not authenticated"

    async def test_admin_guard(self, customer, admin):
        assert await get_admin_user(admin) is admin

        with pytest.raises(HTTPException) as exc_info:
            await get_admin_user(customer)

        assert exc_info.value.status_code == 403


class TestProviders:
    def test_repos_share_session(self, session):
        repos = get_repos(session)

        assert repos.session is session
        assert repos.products.session is session

    def test_pricing_comes_from_settings(self):
        assert get_pricing() is settings.pricing

    def test_current_user_is_annotated_dependency(self):
        assert CurrentUser.__metadata__[0].dependency is get_current_user
