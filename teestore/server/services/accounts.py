"""
Account service.

Signup and signin, profile edits, password changes, soft deletion and the
saved shipping address book.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List

from teestore.core.database.base import utc_now
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import AuthenticationError, BusinessRuleError, ConflictError, NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.io.auth import SignedInUser, SigninRequest, SignupRequest, TokenResponse
from teestore.core.models.io.users import AddressCreate, AddressUpdate, PasswordChange, UserUpdate
from teestore.core.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)


class AccountService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def signup(self, data: SignupRequest) -> User:
        if await self.repos.users.get_by_email(data.email) is not None:
            raise ConflictError("Email is already registered")
        user = User(
            name=data.name.strip(),
            lastname=data.lastname,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        user = await self.repos.users.create(user)
        logger.info(f"User signed up: {user.id}")
        return user

    async def signin(self, data: SigninRequest) -> TokenResponse:
        user = await self.repos.users.get_by_email(data.email)
        if user is None:
            raise BusinessRuleError("User email does not exist")
        if not verify_password(data.password, user.password_hash):
            logger.info(f"Failed signin for user {user.id}")
            raise AuthenticationError("Email and password do not match")
        if not user.is_active:
            raise AuthenticationError("Account has been deactivated")

        token, expires_at = create_access_token(user.id)
        return TokenResponse(
            token=token,
            expiry_time=int(expires_at.timestamp() * 1000),
            user=SignedInUser(id=user.id, name=user.name, email=user.email, role=user.role),
        )

    async def update_profile(self, user: User, data: UserUpdate) -> User:
        update = data.model_dump(exclude_unset=True)
        email = update.get("email")
        if email and email != user.email:
            existing = await self.repos.users.get_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ConflictError("Email is already registered")
        for key, value in update.items():
            if value is None and key in ("name", "email"):
                continue
            setattr(user, key, value)
        return await self.repos.users.update(user)

    async def change_password(self, user: User, data: PasswordChange) -> None:
        if not verify_password(data.current_password, user.password_hash):
            raise BusinessRuleError("Current password is incorrect")
        user.password_hash = hash_password(data.new_password)
        await self.repos.users.update(user)
        logger.info(f"Password changed for user {user.id}")

    async def deactivate(self, user: User) -> None:
        user.is_active = False
        user.deleted_at = utc_now()
        await self.repos.users.update(user)
        logger.info(f"User {user.id} deactivated their account")

    # ------------------------------------------------------------------
    # Address book
    # ------------------------------------------------------------------

    @staticmethod
    def _with_single_default(addresses: List[Dict[str, Any]], default_id: str) -> List[Dict[str, Any]]:
        return [{**address, "is_default": address["id"] == default_id} for address in addresses]

    async def _save_addresses(self, user: User, addresses: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        user.addresses = addresses
        await self.repos.users.update(user)
        return user.addresses

    async def add_address(self, user: User, data: AddressCreate) -> List[Dict[str, Any]]:
        """Save an address; the first one, or one flagged default, becomes the only default."""
        addresses = [dict(address) for address in user.addresses or []]
        address = data.model_dump()
        address["id"] = uuid.uuid4().hex
        address["created_at"] = utc_now().isoformat()
        addresses.append(address)
        if data.is_default or len(addresses) == 1:
            addresses = self._with_single_default(addresses, address["id"])
        return await self._save_addresses(user, addresses)

    async def update_address(self, user: User, address_id: str, data: AddressUpdate) -> List[Dict[str, Any]]:
        addresses = [dict(address) for address in user.addresses or []]
        target = next((address for address in addresses if address["id"] == address_id), None)
        if target is None:
            raise NotFoundError("Address", address_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                target[key] = value
        if data.is_default:
            addresses = self._with_single_default(addresses, address_id)
        return await self._save_addresses(user, addresses)

    async def delete_address(self, user: User, address_id: str) -> List[Dict[str, Any]]:
        addresses = [dict(address) for address in user.addresses or []]
        removed = next((address for address in addresses if address["id"] == address_id), None)
        if removed is None:
            raise NotFoundError("Address", address_id)
        addresses.remove(removed)
        if removed.get("is_default") and addresses:
            addresses = self._with_single_default(addresses, addresses[0]["id"])
        return await self._save_addresses(user, addresses)
