# File: api/middleware/error_middleware.py

from fastapi.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from sentic.common.exceptions.exception_handlers import internal_error_response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException as http_exc:
            raise http_exc

        except Exception as exc:
            return internal_error_response(request, exc)
