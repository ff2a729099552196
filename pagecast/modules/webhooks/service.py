import logging
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client

from pagecast.config.settings import settings
from pagecast.core.exceptions import NotFoundError, UpstreamError
from pagecast.core.validation import require_text, validate_webhook_url
from pagecast.modules.webhooks.schemas import WebhookCreate, WebhookUpdate, WebhookResponse

logger = logging.getLogger(__name__)


class WebhookService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_webhooks(self) -> List[WebhookResponse]:
        result = self.supabase.table("webhooks")\
            .select("*")\
            .order("created_at", desc=True)\
            .execute()
        return [WebhookResponse(**row) for row in result.data or []]

    def get_webhook(self, webhook_id: str) -> WebhookResponse:
        result = self.supabase.table("webhooks")\
            .select("*")\
            .eq("id", webhook_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise NotFoundError("Webhook not found")
        return WebhookResponse(**result.data[0])

    def get_active(self) -> WebhookResponse:
        result = self.supabase.table("webhooks")\
            .select("*")\
            .eq("active", True)\
            .order("created_at", desc=True)\
            .limit(1)\
            .execute()
        if not result.data:
            raise NotFoundError("No active webhook configured")
        return WebhookResponse(**result.data[0])

    def create_webhook(self, data: WebhookCreate, created_by: Optional[str] = None) -> WebhookResponse:
        """Create a webhook; `active=True` goes through activate() so only one stays active"""
        row = {
            "name": require_text(data.name, "Name"),
            "url": validate_webhook_url(data.url, production=settings.is_production),
            "active": False,
            "created_by": created_by,
        }
        result = self.supabase.table("webhooks").insert(row).execute()
        if not result.data:
            raise UpstreamError("Failed to create webhook")
        webhook = WebhookResponse(**result.data[0])
        if data.active:
            return self.activate(webhook.id)
        return webhook

    def update_webhook(self, webhook_id: str, data: WebhookUpdate) -> WebhookResponse:
        update_data = {}
        if data.name is not None:
            update_data["name"] = require_text(data.name, "Name")
        if data.url is not None:
            update_data["url"] = validate_webhook_url(data.url, production=settings.is_production)
        if data.active is False:
            update_data["active"] = False

        if update_data:
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("webhooks")\
                .update(update_data)\
                .eq("id", webhook_id)\
                .execute()
            if not result.data:
                raise NotFoundError("Webhook not found")

        if data.active:
            return self.activate(webhook_id)
        return self.get_webhook(webhook_id)

    def activate(self, webhook_id: str) -> WebhookResponse:
        """Deactivate every other webhook and activate this one in one database call"""
        self.get_webhook(webhook_id)
        self.supabase.rpc("activate_webhook", {"webhook_id": webhook_id}).execute()
        logger.info("Webhook %s activated", webhook_id)
        return self.get_webhook(webhook_id)

    def delete_webhook(self, webhook_id: str) -> bool:
        result = self.supabase.table("webhooks")\
            .delete()\
            .eq("id", webhook_id)\
            .execute()
        if not result.data:
            raise NotFoundError("Webhook not found")
        return True
