"""
Operation Entry Points

One coroutine per unit of work. Each takes a request payload (camelCase
keys), runs the matching service call and returns a structured response.
Shared by the HTTP API and the Lambda handlers.
"""
import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from accountkit.modules.users.api.responses import structured_operation, success
from accountkit.modules.users.domain.errors import UserNotFoundError
from accountkit.modules.users.repositories.user_repository import UserRepository
from accountkit.modules.users.services.admin_service import AdminService
from accountkit.modules.users.services.billing_service import BillingService
from accountkit.modules.users.services.notification_service import (
    NotificationOverrides,
    NotificationService,
)

logger = logging.getLogger("accountkit.users.operations")

UserStatus = Literal["active", "inactive", "suspended"]
BillingPlan = Literal["free", "standard", "premium"]


# Request Models
class RequestModel(BaseModel):
    """Unknown keys are rejected rather than dropped."""
    model_config = ConfigDict(extra="forbid")


class NotificationSettingsPatch(RequestModel):
    email: Optional[bool] = None
    sms: Optional[bool] = None
    push: Optional[bool] = None

    def provided(self) -> Dict[str, bool]:
        return self.model_dump(exclude_none=True)


class CreateUserRequest(RequestModel):
    email: EmailStr
    name: str = Field(min_length=1)
    id: Optional[str] = None
    status: Optional[UserStatus] = None
    billingPlan: Optional[BillingPlan] = None
    notificationSettings: Optional[NotificationSettingsPatch] = None


class UserIdRequest(RequestModel):
    userId: str = Field(min_length=1)


class FindByEmailRequest(RequestModel):
    email: str = Field(min_length=1)


class UpdateUserRequest(UserIdRequest):
    updates: Dict[str, Any]


class ProcessBillingRequest(UserIdRequest):
    billingPeriod: Optional[str] = None


class RecordBillingRequest(UserIdRequest):
    billingDate: str
    amount: Union[int, float]


class ChangePlanRequest(UserIdRequest):
    newPlan: BillingPlan


class NotificationOverridesRequest(RequestModel):
    forceEmail: bool = False
    forceSms: bool = False
    forcePush: bool = False


class SendNotificationRequest(UserIdRequest):
    message: str = Field(min_length=1)
    overrides: Optional[NotificationOverridesRequest] = None


class UpdateNotificationSettingsRequest(UserIdRequest):
    settings: NotificationSettingsPatch


class SuspendUserRequest(UserIdRequest):
    reason: str
    notifyUser: bool = True


class DeleteUserRequest(UserIdRequest):
    hardDelete: bool = False
    reason: Optional[str] = None


# Service instances (process-wide)
_repository = UserRepository()
_billing_service = BillingService(_repository)
_notification_service = NotificationService(_repository)
_admin_service = AdminService(_repository, _notification_service)


@structured_operation(CreateUserRequest)
async def create_user(request: CreateUserRequest) -> Dict[str, Any]:
    user_data = request.model_dump(exclude_none=True, exclude={"notificationSettings"})
    if request.notificationSettings is not None:
        user_data["notificationSettings"] = request.notificationSettings.provided()
    user = await _repository.create(user_data)
    return success(user=user.to_dict())


@structured_operation(UserIdRequest)
async def get_user(request: UserIdRequest) -> Dict[str, Any]:
    user = await _repository.find_by_id(request.userId)
    if not user:
        raise UserNotFoundError(request.userId)
    return success(user=user.to_dict())


@structured_operation(FindByEmailRequest)
async def find_users_by_email(request: FindByEmailRequest) -> Dict[str, Any]:
    users = await _repository.find_by_email(request.email)
    return success(users=[user.to_dict() for user in users], count=len(users))


@structured_operation(UpdateUserRequest)
async def update_user(request: UpdateUserRequest) -> Dict[str, Any]:
    await _repository.update(request.userId, request.updates)
    return success(userId=request.userId)


@structured_operation(ProcessBillingRequest)
async def process_billing(request: ProcessBillingRequest) -> Dict[str, Any]:
    result = await _billing_service.process_billing(request.userId, request.billingPeriod)
    return success(
        message="Billing processed successfully",
        userId=request.userId,
        billingAmount=result.amount,
        billingDetails=result.to_dict()["breakdown"],
        billingPeriod=request.billingPeriod or "current",
    )


@structured_operation(UserIdRequest)
async def calculate_billing(request: UserIdRequest) -> Dict[str, Any]:
    result = await _billing_service.calculate_user_billing(request.userId)
    return success(**result.to_dict())


@structured_operation(RecordBillingRequest)
async def record_billing(request: RecordBillingRequest) -> Dict[str, Any]:
    await _billing_service.record_billing(request.userId, request.billingDate, request.amount)
    return success(userId=request.userId)


@structured_operation(ChangePlanRequest)
async def change_billing_plan(request: ChangePlanRequest) -> Dict[str, Any]:
    await _billing_service.change_plan(request.userId, request.newPlan)
    return success(userId=request.userId, billingPlan=request.newPlan)


@structured_operation(UserIdRequest)
async def get_billing_history(request: UserIdRequest) -> Dict[str, Any]:
    history: List[Dict[str, Any]] = await _billing_service.get_billing_history(request.userId)
    return success(userId=request.userId, history=history)


@structured_operation(SendNotificationRequest)
async def send_notification(request: SendNotificationRequest) -> Dict[str, Any]:
    overrides = None
    if request.overrides is not None:
        overrides = NotificationOverrides(
            force_email=request.overrides.forceEmail,
            force_sms=request.overrides.forceSms,
            force_push=request.overrides.forcePush,
        )
    channels = await _notification_service.notify(request.userId, request.message, overrides)
    return success(userId=request.userId, channels=channels)


@structured_operation(UpdateNotificationSettingsRequest)
async def update_notification_settings(request: UpdateNotificationSettingsRequest) -> Dict[str, Any]:
    settings = await _notification_service.update_notification_settings(
        request.userId, request.settings.provided()
    )
    return success(userId=request.userId, notificationSettings=settings)


@structured_operation(SuspendUserRequest)
async def suspend_user(request: SuspendUserRequest) -> Dict[str, Any]:
    await _admin_service.suspend_user(request.userId, request.reason, request.notifyUser)
    return success(userId=request.userId, userStatus="suspended")


@structured_operation(UserIdRequest)
async def reactivate_user(request: UserIdRequest) -> Dict[str, Any]:
    await _admin_service.reactivate_user(request.userId)
    return success(userId=request.userId, userStatus="active")


@structured_operation(DeleteUserRequest)
async def delete_user(request: DeleteUserRequest) -> Dict[str, Any]:
    await _admin_service.delete_user_account(request.userId, request.hardDelete, request.reason)
    return success(userId=request.userId, hardDelete=request.hardDelete)


@structured_operation(UserIdRequest)
async def analyze_user_activity(request: UserIdRequest) -> Dict[str, Any]:
    activity = await _admin_service.analyze_user_activity(request.userId)
    return success(activity=activity)
