"""
User Management API Endpoints

REST API endpoints for user CRUD operations. Each route delegates to an
operation entry point and returns its structured response; the HTTP status
mirrors the errorKind.
"""
import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse
from accountkit.modules.users.api import operations
from accountkit.modules.users.api.responses import http_status_for

logger = logging.getLogger("accountkit.users.api")

router = APIRouter(prefix="/api/users", tags=["users"])


def to_response(result: Dict[str, Any], success_status: int = 200) -> JSONResponse:
    return JSONResponse(content=result, status_code=http_status_for(result, success_status))


@router.post("")
async def create_user(payload: Dict[str, Any] = Body(...)):
    """
    Create a new user. Omitted status, billing plan and notification
    settings take their defaults.
    """
    logger.debug(f"[user_endpoints.create_user] email={payload.get('email')}")
    return to_response(await operations.create_user(payload), success_status=201)


@router.get("")
async def find_users(email: str = Query(..., description="Email to look up")):
    """List users with the given email."""
    return to_response(await operations.find_users_by_email({"email": email}))


@router.get("/{user_id}")
async def get_user(user_id: str):
    return to_response(await operations.get_user({"userId": user_id}))


@router.patch("/{user_id}")
async def update_user(user_id: str, updates: Dict[str, Any] = Body(...)):
    """Partially update a user; only the supplied fields change."""
    logger.debug(f"[user_endpoints.update_user] user_id={user_id}, fields={list(updates.keys())}")
    return to_response(await operations.update_user({"userId": user_id, "updates": updates}))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    hard_delete: bool = Query(False, description="Remove the record instead of marking it inactive"),
    reason: Optional[str] = Query(None)
):
    payload = {"userId": user_id, "hardDelete": hard_delete}
    if reason:
        payload["reason"] = reason
    return to_response(await operations.delete_user(payload))
