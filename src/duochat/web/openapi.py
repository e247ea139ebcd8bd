from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from duochat.web.deps import AUTH_COOKIE


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="duochat API",
            version="0.1.0",
            summary="Two-person chat room behind a TOTP login",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "AuthCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": AUTH_COOKIE,
                "description": "Signed session token set by the login endpoint",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [{"AuthCookie": []}]

        public_endpoints = {
            ("POST", "/api/v1/auth"),
            ("POST", "/api/v1/logout"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    # Mark as public endpoint (no security required)
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Invalid TOTP code", "type": "authentication_error"},
                {"error": "TOTP secret not configured", "type": "configuration_error"},
            ]
        }
    }
