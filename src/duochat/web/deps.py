from typing import Annotated, cast

from fastapi import Depends
from fastapi.requests import HTTPConnection
from fastapi.security import APIKeyCookie

from duochat.app import App

AUTH_COOKIE = "auth"

cookie_scheme = APIKeyCookie(name=AUTH_COOKIE, auto_error=False)


async def get_app(connection: HTTPConnection) -> App:
    return cast(App, connection.app.state.app)


async def get_identity(
    app: Annotated[App, Depends(get_app)],
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> str:
    """Resolve the session cookie to an identity, raising AuthenticationError if absent or invalid."""
    return app.get_identity(token_cookie)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
IdentityDep = Annotated[str, Depends(get_identity)]
