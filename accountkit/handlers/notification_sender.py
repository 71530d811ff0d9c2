"""
Notification Sender function.

Event: {"userId": str, "message": str, "overrides"?: {"forceEmail"?, "forceSms"?, "forcePush"?}}
"""
from accountkit.handlers.lambda_response import run_operation
from accountkit.modules.users.api import operations


def handler(event, context=None):
    return run_operation("Notification Sender", operations.send_notification, event)
