"""
Structured Responses

Every operation entry point returns ``{"status": "success", ...}`` or
``{"status": "error", "errorKind": ..., "message": ...}`` and never raises
past the boundary. Cancellation is not an ``Exception`` and still propagates.
"""
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

from accountkit.modules.users.domain.errors import AccountError

logger = logging.getLogger("accountkit.users.api")

M = TypeVar("M", bound=BaseModel)

# errorKind -> HTTP status for the API surface
ERROR_STATUS_CODES = {
    "NotFoundError": 404,
    "ValidationError": 400,
    "InvalidTransitionError": 409,
    "AlreadyExistsError": 409,
    "TransportError": 502,
    "StorageError": 503,
    "InternalError": 500,
}


def success(**fields: Any) -> Dict[str, Any]:
    return {"status": "success", **fields}


def failure(error_kind: str, message: str) -> Dict[str, Any]:
    return {"status": "error", "errorKind": error_kind, "message": message}


def http_status_for(response: Dict[str, Any], success_status: int = 200) -> int:
    if response.get("status") == "success":
        return success_status
    return ERROR_STATUS_CODES.get(response.get("errorKind"), 500)


def _describe_payload_errors(error: PayloadValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "payload"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def structured_operation(
    request_model: Type[M]
) -> Callable[[Callable[[M], Awaitable[Dict[str, Any]]]], Callable[[Optional[Dict[str, Any]]], Awaitable[Dict[str, Any]]]]:
    """Validate the payload into ``request_model`` and translate every failure."""
    def decorator(func: Callable[[M], Awaitable[Dict[str, Any]]]):
        name = func.__name__

        @wraps(func)
        async def wrapper(payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
            try:
                request = request_model.model_validate(payload if payload is not None else {})
            except PayloadValidationError as e:
                logger.warning(f"[{name}] invalid payload: {e.error_count()} error(s)")
                return failure("ValidationError", _describe_payload_errors(e))

            try:
                return await func(request)
            except AccountError as e:
                logger.warning(f"[{name}] {e.error_kind}: {e}")
                return failure(e.error_kind, str(e))
            except Exception as e:
                logger.error(f"[{name}] ERROR: {e}", exc_info=True)
                return failure("InternalError", str(e) or e.__class__.__name__)

        return wrapper
    return decorator
