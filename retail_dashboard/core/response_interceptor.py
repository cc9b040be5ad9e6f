"""
Success Response Interceptor Middleware.
Wraps successful JSON API responses in a standard envelope:

    {"success": true, "data": <original response>, "count": <len if list>}

HTML pages and the OpenAPI/docs endpoints are passed through untouched.
"""

from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware
import json


# Key for skipping the interceptor on specific routes
SKIP_INTERCEPTOR_KEY = "skip_interceptor"

API_PREFIX = "/api"


class SuccessResponseInterceptor(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if not request.url.path.startswith(API_PREFIX):
            return response

        if not (200 <= response.status_code < 300):
            return response

        if getattr(request.state, SKIP_INTERCEPTOR_KEY, False):
            return response

        if "application/json" not in response.headers.get("content-type", ""):
            return response

        body = b""
        async for chunk in response.body_iterator:
            body += chunk

        # Raw pairs keep repeated headers such as Set-Cookie
        headers = MutableHeaders(
            raw=[
                (key, value)
                for key, value in response.raw_headers
                if key.lower() != b"content-length"
            ]
        )

        try:
            original_data = json.loads(body.decode())
        except (json.JSONDecodeError, UnicodeDecodeError):
            return Response(
                content=body, status_code=response.status_code, headers=headers
            )

        wrapped = {"success": True, "data": original_data}
        if isinstance(original_data, list):
            wrapped["count"] = len(original_data)

        return JSONResponse(
            content=wrapped, status_code=response.status_code, headers=headers
        )


def skip_interceptor(func: Callable) -> Callable:
    """
    Decorator to return a route's response without the success envelope.

    Usage:
        @router.get("/raw")
        @skip_interceptor
        async def raw_endpoint():
            return {"status": "ok"}
    """
    setattr(func, SKIP_INTERCEPTOR_KEY, True)
    return func


class CustomAPIRoute(APIRoute):
    """Copies the skip_interceptor flag of the endpoint onto request.state."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            if getattr(self.endpoint, SKIP_INTERCEPTOR_KEY, False):
                setattr(request.state, SKIP_INTERCEPTOR_KEY, True)
            return await original_route_handler(request)

        return custom_route_handler
