from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field

from duochat.web.deps import AUTH_COOKIE, AppDep, IdentityDep
from duochat.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """TOTP login request."""

    code: str = Field(..., description="6-digit code from the authenticator app; spaces are ignored")


class LoginResponse(BaseModel):
    """Successful login."""

    success: bool = Field(True, description="Always true")
    username: str = Field(..., description="Identity the code belongs to")


class SuccessResponse(BaseModel):
    success: bool = True


class MeResponse(BaseModel):
    username: str = Field(..., description="Identity of the current session")


@router.post(
    "/auth",
    summary="Log in with a TOTP code",
    description="Verify a one-time code against both configured secrets and set the session cookie.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid code"},
        500: {"model": ErrorResponse, "description": "Secrets not configured"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, request: Request, response: Response) -> LoginResponse:
    identity, token = app.login(login_data.code)
    config = request.app.state.config

    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        samesite="strict",
        secure=config.cookie_secure,
        max_age=config.session_ttl_days * 24 * 60 * 60,  # Cookie lives as long as the token
        path="/",
    )

    return LoginResponse(username=identity)


@router.post(
    "/logout",
    summary="End session",
    description="Clear the session cookie.",
    operation_id="logout",
)
async def logout(request: Request, response: Response) -> SuccessResponse:
    response.delete_cookie(
        AUTH_COOKIE,
        path="/",
        httponly=True,
        samesite="strict",
        secure=request.app.state.config.cookie_secure,
    )
    return SuccessResponse()


@router.get(
    "/me",
    summary="Current identity",
    description="Return the identity of the current session.",
    operation_id="getMe",
    responses={
        200: {"description": "Authenticated identity"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_me(identity: IdentityDep) -> MeResponse:
    return MeResponse(username=identity)
