"""
Error handling for the HTTP surface.
Translates document errors into structured JSON error responses.
"""
import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from facturacr.core.exceptions import FacturaError, InternalConsistencyError, ValidationError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Routes exceptions to handlers producing structured error responses
    """

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Main exception handler that routes to specific handlers

        Args:
            request: FastAPI request object
            exc: Exception to handle

        Returns:
            JSONResponse with structured error information
        """
        error_id = str(uuid.uuid4())

        if isinstance(exc, PydanticValidationError):
            return self._handle_pydantic_validation_error(request, exc, error_id)
        if isinstance(exc, ValidationError):
            return self._handle_validation_error(request, exc, error_id)
        if isinstance(exc, InternalConsistencyError):
            return self._handle_internal_consistency_error(request, exc, error_id)
        if isinstance(exc, FacturaError):
            return self._create_error_response(
                status.HTTP_400_BAD_REQUEST, error_id, exc.error_code, exc.message
            )
        raise exc

    def _handle_pydantic_validation_error(
        self,
        request: Request,
        exc: PydanticValidationError,
        error_id: str
    ) -> JSONResponse:
        """Handle construction errors raised while building the entity graph"""
        field_errors: Dict[str, Any] = {}
        for error in exc.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            field_errors.setdefault(field_path, []).append(error["msg"])

        logger.info("Schema validation failed on %s %s: %s", request.method, request.url.path, field_errors)
        return self._create_error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_id,
            "SCHEMA_VALIDATION_ERROR",
            "Data validation failed",
            field_errors
        )

    def _handle_validation_error(
        self,
        request: Request,
        exc: ValidationError,
        error_id: str
    ) -> JSONResponse:
        """Handle rule violations reported by the validation engine"""
        logger.info("Document validation failed on %s %s: %s", request.method, request.url.path, exc.field_errors)
        return self._create_error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_id,
            exc.error_code,
            "Document validation failed",
            exc.field_errors
        )

    def _handle_internal_consistency_error(
        self,
        request: Request,
        exc: InternalConsistencyError,
        error_id: str
    ) -> JSONResponse:
        """Handle derived invariant failures; these are defects, not bad input"""
        logger.critical(
            "Internal consistency error %s on %s %s: %s",
            error_id, request.method, request.url.path, exc.message
        )
        return self._create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_id,
            exc.error_code,
            "Internal consistency error while deriving document identifiers"
        )

    def _create_error_response(
        self,
        status_code: int,
        error_id: str,
        error_code: str,
        message: str,
        field_errors: Optional[Dict[str, Any]] = None
    ) -> JSONResponse:
        content: Dict[str, Any] = {
            "error": {
                "id": error_id,
                "code": error_code,
                "message": message,
            }
        }
        if field_errors:
            content["error"]["field_errors"] = field_errors
        return JSONResponse(status_code=status_code, content=content)


# Global error handler instance
error_handler = ErrorHandler()
