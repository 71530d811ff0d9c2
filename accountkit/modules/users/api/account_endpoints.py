"""
Account API Endpoints

Billing, notification and admin lifecycle routes for a single user.
"""
import logging
from typing import Any, Dict
from fastapi import APIRouter, Body
from accountkit.modules.users.api import operations
from accountkit.modules.users.api.user_endpoints import to_response

logger = logging.getLogger("accountkit.users.api")

router = APIRouter(prefix="/api/users", tags=["accounts"])


def with_user(user_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
    return {**body, "userId": user_id}


# Billing
@router.get("/{user_id}/billing")
async def calculate_billing(user_id: str):
    return to_response(await operations.calculate_billing({"userId": user_id}))


@router.post("/{user_id}/billing/process")
async def process_billing(user_id: str, body: Dict[str, Any] = Body(default={})):
    """Calculate the current bill and record it on the user."""
    return to_response(await operations.process_billing(with_user(user_id, body)))


@router.post("/{user_id}/billing/records")
async def record_billing(user_id: str, body: Dict[str, Any] = Body(...)):
    return to_response(await operations.record_billing(with_user(user_id, body)))


@router.put("/{user_id}/billing/plan")
async def change_billing_plan(user_id: str, body: Dict[str, Any] = Body(...)):
    return to_response(await operations.change_billing_plan(with_user(user_id, body)))


@router.get("/{user_id}/billing/history")
async def get_billing_history(user_id: str):
    return to_response(await operations.get_billing_history({"userId": user_id}))


# Notifications
@router.post("/{user_id}/notifications")
async def send_notification(user_id: str, body: Dict[str, Any] = Body(...)):
    """
    Send a message on the user's enabled channels.

    Body: {"message": str, "overrides": {"forceEmail"?, "forceSms"?, "forcePush"?}}
    """
    return to_response(await operations.send_notification(with_user(user_id, body)))


@router.patch("/{user_id}/notification-settings")
async def update_notification_settings(user_id: str, settings: Dict[str, Any] = Body(...)):
    return to_response(
        await operations.update_notification_settings({"userId": user_id, "settings": settings})
    )


# Admin lifecycle
@router.post("/{user_id}/suspend")
async def suspend_user(user_id: str, body: Dict[str, Any] = Body(...)):
    logger.debug(f"[account_endpoints.suspend_user] user_id={user_id}")
    return to_response(await operations.suspend_user(with_user(user_id, body)))


@router.post("/{user_id}/reactivate")
async def reactivate_user(user_id: str):
    return to_response(await operations.reactivate_user({"userId": user_id}))


@router.get("/{user_id}/activity")
async def analyze_user_activity(user_id: str):
    return to_response(await operations.analyze_user_activity({"userId": user_id}))
