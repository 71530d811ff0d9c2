"""
Billing Processor function.

Event: {"userId": str, "billingPeriod"?: str}
Calculates the user's bill and records it as the latest billing.
"""
from accountkit.handlers.lambda_response import run_operation
from accountkit.modules.users.api import operations


def handler(event, context=None):
    return run_operation("Billing Processor", operations.process_billing, event)
