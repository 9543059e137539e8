"""
Centralized error handlers for FastAPI.

Maps directory errors to HTTP responses.
Error responses carry a status code and no body: no stack traces,
causes or internal details are exposed to clients. The full chain is
logged here, once.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response

from email_hint.domain.directory.errors import (
    ContextMisconfiguredError,
    DBRequestFailedError,
    DirectoryDomainError,
    IncorrectPrefixError,
    SerializationFailedError,
    StorageError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_500 = 500


def _error_response(status_code: int) -> Response:
    """Build an empty error response."""
    return Response(status_code=status_code)


def _describe_cause(exc: BaseException) -> str:
    cause = exc.__cause__
    if cause is None:
        return "-"
    return f"{type(cause).__name__}: {cause}"


def register_error_handlers(app: FastAPI) -> None:
    """Register all directory error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(IncorrectPrefixError)
    async def handle_incorrect_prefix(
        _request: Request, exc: IncorrectPrefixError
    ) -> Response:
        """Handle rejected email prefixes."""
        logger.warning("%s (prefix=%r)", exc.message, exc.prefix)
        return _error_response(HTTP_400)

    @app.exception_handler(DBRequestFailedError)
    async def handle_db_request_failed(
        _request: Request, exc: DBRequestFailedError
    ) -> Response:
        """Handle data-layer failures reported by the lookup service."""
        logger.error("%s (cause: %s)", exc.message, _describe_cause(exc))
        return _error_response(HTTP_500)

    @app.exception_handler(StorageError)
    async def handle_storage(_request: Request, exc: StorageError) -> Response:
        """Handle failures to acquire a database handle."""
        logger.error("%s (cause: %s)", exc.message, _describe_cause(exc))
        return _error_response(HTTP_500)

    @app.exception_handler(SerializationFailedError)
    async def handle_serialization_failed(
        _request: Request, exc: SerializationFailedError
    ) -> Response:
        """Handle response encoding failures."""
        logger.error(exc.message)
        return _error_response(HTTP_500)

    @app.exception_handler(ContextMisconfiguredError)
    async def handle_context_misconfigured(
        _request: Request, exc: ContextMisconfiguredError
    ) -> Response:
        """Handle pipeline wiring defects."""
        logger.error(exc.message)
        return _error_response(HTTP_500)

    @app.exception_handler(DirectoryDomainError)
    async def handle_directory_domain(
        _request: Request, exc: DirectoryDomainError
    ) -> Response:
        """Catch-all for unhandled directory errors."""
        logger.error("Unhandled directory error: %s", exc.message)
        return _error_response(HTTP_500)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> Response:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500)
