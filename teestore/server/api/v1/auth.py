"""
Authentication Endpoints.

Account signup and bearer token issuance. Tokens are stateless JWTs, so
signing out is a client-side operation.
"""

from fastapi import APIRouter, status

from teestore.core.models.io.auth import SigninRequest, SignupRequest, SignupResponse, TokenResponse
from teestore.core.models.io.common import Message
from teestore.server.services.accounts import AccountService
from teestore.server.services.deps import ReposDep

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Account",
    description="Register a customer account with a unique e-mail address.",
    responses={409: {"description": "Email already registered"}},
)
async def signup(data: SignupRequest, repos: ReposDep) -> SignupResponse:
    user = await AccountService(repos).signup(data)
    return SignupResponse(id=user.id, name=user.name, email=user.email)


@router.post(
    "/signin",
    response_model=TokenResponse,
    summary="Sign In",
    description="Exchange e-mail and password for a bearer token valid for 14 days.",
    responses={
        400: {"description": "Unknown e-mail"},
        401: {"description": "Wrong password or deactivated account"},
    },
)
async def signin(data: SigninRequest, repos: ReposDep) -> TokenResponse:
    return await AccountService(repos).signin(data)


@router.post(
    "/signout",
    response_model=Message,
    summary="Sign Out",
    description="Acknowledge a sign out; the client discards its token.",
)
async def signout() -> Message:
    return Message(message="User signed out successfully")
