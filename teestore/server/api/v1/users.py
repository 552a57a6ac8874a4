"""
User Account Endpoints.

Profile, password, soft deletion, the saved address book and purchase
history of the signed-in customer, plus the admin user listing.
"""

from typing import List

from fastapi import APIRouter, Query

from teestore.core.models.io.common import Message
from teestore.core.models.io.orders import OrderRead
from teestore.core.models.io.users import (
    AddressCreate,
    AddressRead,
    AddressUpdate,
    PasswordChange,
    UserRead,
    UserUpdate,
)
from teestore.server.services.accounts import AccountService
from teestore.server.services.deps import AdminUser, CurrentUser, ReposDep
from teestore.server.services.orders import OrderService

router = APIRouter()


@router.get(
    "/me",
    response_model=UserRead,
    summary="Get Profile",
    description="Return the signed-in user's profile.",
)
async def get_me(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)


@router.put(
    "/me",
    response_model=UserRead,
    summary="Update Profile",
    description="Edit profile fields. Changing the e-mail checks it is not taken.",
    responses={409: {"description": "Email already registered"}},
)
async def update_me(data: UserUpdate, user: CurrentUser, repos: ReposDep) -> UserRead:
    return UserRead.model_validate(await AccountService(repos).update_profile(user, data))


@router.post(
    "/me/password",
    response_model=Message,
    summary="Change Password",
    responses={400: {"description": "Current password is incorrect"}},
)
async def change_password(data: PasswordChange, user: CurrentUser, repos: ReposDep) -> Message:
    await AccountService(repos).change_password(user, data)
    return Message(message="Password updated")


@router.delete(
    "/me",
    response_model=Message,
    summary="Delete Account",
    description="Deactivate the account. Order history is kept.",
)
async def delete_me(user: CurrentUser, repos: ReposDep) -> Message:
    await AccountService(repos).deactivate(user)
    return Message(message="Account deleted")


@router.get(
    "/me/addresses",
    response_model=List[AddressRead],
    summary="List Saved Addresses",
)
async def list_addresses(user: CurrentUser) -> List[AddressRead]:
    return [AddressRead.model_validate(address) for address in user.addresses or []]


@router.post(
    "/me/addresses",
    response_model=List[AddressRead],
    status_code=201,
    summary="Save Address",
    description="Save a shipping address. The first address, or one flagged default, becomes the only default.",
)
async def add_address(data: AddressCreate, user: CurrentUser, repos: ReposDep) -> List[AddressRead]:
    addresses = await AccountService(repos).add_address(user, data)
    return [AddressRead.model_validate(address) for address in addresses]


@router.put(
    "/me/addresses/{address_id}",
    response_model=List[AddressRead],
    summary="Update Address",
    responses={404: {"description": "Address not found"}},
)
async def update_address(
    address_id: str, data: AddressUpdate, user: CurrentUser, repos: ReposDep
) -> List[AddressRead]:
    addresses = await AccountService(repos).update_address(user, address_id, data)
    return [AddressRead.model_validate(address) for address in addresses]


@router.delete(
    "/me/addresses/{address_id}",
    response_model=List[AddressRead],
    summary="Delete Address",
    description="Remove a saved address. When the default is removed the first remaining address becomes default.",
    responses={404: {"description": "Address not found"}},
)
async def delete_address(address_id: str, user: CurrentUser, repos: ReposDep) -> List[AddressRead]:
    addresses = await AccountService(repos).delete_address(user, address_id)
    return [AddressRead.model_validate(address) for address in addresses]


@router.get(
    "/me/purchases",
    response_model=List[OrderRead],
    summary="Purchase History",
    description="The signed-in user's orders, newest first.",
)
async def purchases(user: CurrentUser, repos: ReposDep) -> List[OrderRead]:
    service = OrderService(repos)
    return await service.read_many(await repos.orders.list_for_user(user.id))


@router.get(
    "",
    response_model=List[UserRead],
    summary="List Users",
    description="Admin listing of all accounts.",
)
async def list_users(
    admin: AdminUser,
    repos: ReposDep,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> List[UserRead]:
    return [UserRead.model_validate(user) for user in await repos.users.list(limit=limit, offset=offset)]
