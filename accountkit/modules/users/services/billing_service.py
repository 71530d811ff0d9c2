"""
Billing Service

Plan pricing, billing records and plan changes.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List, Dict, Any

from accountkit.modules.audit_manager import audit_manager
from accountkit.modules.users.domain import events
from accountkit.modules.users.domain.errors import UserNotFoundError
from accountkit.modules.users.domain.user import User, utc_now, validate_billing_plan
from accountkit.modules.users.repositories.user_repository import UserRepository

logger = logging.getLogger("accountkit.users.billing")

# Integer minor currency units
PLAN_PRICES = {
    "free": 0,
    "standard": 1000,
    "premium": 5000,
}
TAX_RATE = Decimal("0.10")


@dataclass
class BillingBreakdown:
    base_price: int
    tax: int
    total: int


@dataclass
class BillingResult:
    amount: int
    breakdown: BillingBreakdown

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "breakdown": {
                "basePrice": self.breakdown.base_price,
                "tax": self.breakdown.tax,
                "total": self.breakdown.total,
            },
        }


def calculate_tax(base_price: int) -> int:
    """Tax rounded half-up to the nearest minor unit."""
    return int((Decimal(base_price) * TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_billing(user: User) -> BillingResult:
    """Compute the amount due for a user's current plan."""
    base_price = PLAN_PRICES[validate_billing_plan(user.billing_plan)]
    tax = calculate_tax(base_price)
    total = base_price + tax
    return BillingResult(amount=total, breakdown=BillingBreakdown(base_price, tax, total))


class BillingService:
    """Service for billing business logic."""

    def __init__(self, repository: Optional[UserRepository] = None):
        self.repository = repository or UserRepository()

    async def _require_user(self, user_id: str) -> User:
        user = await self.repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def calculate_user_billing(
        self,
        user_id: str,
        billing_period: Optional[str] = None
    ) -> BillingResult:
        user = await self._require_user(user_id)
        result = calculate_billing(user)
        logger.info(
            f"[BillingService.calculate_user_billing] user_id={user_id}, plan={user.billing_plan}, "
            f"amount={result.amount}, period={billing_period or 'current'}"
        )
        return result

    async def record_billing(self, user_id: str, billing_date: str, amount: float) -> None:
        """Store the last billing date and amount on the user."""
        await self.repository.update(user_id, {
            "last_billing_date": billing_date,
            "last_billing_amount": amount,
        })
        audit_manager.log_event(
            events.BILLING_RECORDED,
            user_id,
            {"billingDate": billing_date, "amount": amount},
        )

    async def change_plan(self, user_id: str, new_plan: str) -> None:
        validate_billing_plan(new_plan)
        user = await self._require_user(user_id)

        await self.repository.update(user_id, {"billing_plan": new_plan})
        audit_manager.log_event(
            events.BILLING_PLAN_CHANGED,
            user_id,
            {"from": user.billing_plan, "to": new_plan},
        )

    async def get_billing_history(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Billing history derived from the last billing record.

        There is no separate history table; the entry reflects the user's
        latest recorded billing. ``amount`` is the recorded total, tax
        included. Before any billing is recorded it falls back to the plan
        price, which excludes tax.
        """
        user = await self._require_user(user_id)
        return [
            {
                "date": user.last_billing_date,
                "amount": user.last_billing_amount
                if user.last_billing_amount is not None
                else PLAN_PRICES[user.billing_plan],
                "plan": user.billing_plan,
            }
        ]

    async def process_billing(
        self,
        user_id: str,
        billing_period: Optional[str] = None,
        billing_date: Optional[str] = None
    ) -> BillingResult:
        """Calculate the bill and record it as the user's latest billing."""
        result = await self.calculate_user_billing(user_id, billing_period)
        billing_date = billing_date or utc_now().strftime("%Y-%m-%d")
        await self.record_billing(user_id, billing_date, result.amount)
        return result
