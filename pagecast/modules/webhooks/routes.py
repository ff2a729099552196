from fastapi import APIRouter, Depends
from pagecast.core.dependencies import get_current_user, require_role
from pagecast.core.policy import can_manage_settings, can_read_webhooks
from pagecast.core.rate_limit import settings_rate_limit
from pagecast.core.validation import validate_record_id
from pagecast.database.supabase_client import get_service_supabase
from pagecast.modules.webhooks.schemas import WebhookCreate, WebhookUpdate, WebhookResponse
from pagecast.modules.webhooks.service import WebhookService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

require_webhook_reader = require_role(can_read_webhooks, "Unauthorized: Admin access required")
require_webhook_manager = require_role(can_manage_settings, "Unauthorized: Admin access required")


def get_webhook_service(supabase: Client = Depends(get_service_supabase)) -> WebhookService:
    return WebhookService(supabase)


@router.get("", response_model=List[WebhookResponse])
def list_webhooks(
    user_data: Dict = Depends(require_webhook_reader),
    service: WebhookService = Depends(get_webhook_service)
):
    """List webhooks (admins and owners only)"""
    return service.list_webhooks()


@router.get("/active", response_model=WebhookResponse)
def get_active_webhook(
    user_data: Dict = Depends(get_current_user),
    service: WebhookService = Depends(get_webhook_service)
):
    """The webhook jobs are submitted to; readable by any signed-in user"""
    return service.get_active()


@router.post("", response_model=WebhookResponse, status_code=201, dependencies=[Depends(settings_rate_limit)])
def create_webhook(
    webhook_data: WebhookCreate,
    user_data: Dict = Depends(require_webhook_manager),
    service: WebhookService = Depends(get_webhook_service)
):
    """Create a webhook"""
    return service.create_webhook(webhook_data, created_by=user_data["id"])


@router.put("/{webhook_id}", response_model=WebhookResponse, dependencies=[Depends(settings_rate_limit)])
def update_webhook(
    webhook_id: str,
    webhook_data: WebhookUpdate,
    user_data: Dict = Depends(require_webhook_manager),
    service: WebhookService = Depends(get_webhook_service)
):
    """Update a webhook"""
    return service.update_webhook(validate_record_id(webhook_id, "webhook"), webhook_data)


@router.post(
    "/{webhook_id}/activate", response_model=WebhookResponse, dependencies=[Depends(settings_rate_limit)]
)
def activate_webhook(
    webhook_id: str,
    user_data: Dict = Depends(require_webhook_manager),
    service: WebhookService = Depends(get_webhook_service)
):
    """Make this the only active webhook"""
    return service.activate(validate_record_id(webhook_id, "webhook"))


@router.delete("/{webhook_id}", status_code=204, dependencies=[Depends(settings_rate_limit)])
def delete_webhook(
    webhook_id: str,
    user_data: Dict = Depends(require_webhook_manager),
    service: WebhookService = Depends(get_webhook_service)
):
    """Delete a webhook"""
    service.delete_webhook(validate_record_id(webhook_id, "webhook"))
    return None
