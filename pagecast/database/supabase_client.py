import logging

from supabase import create_client, Client
from pagecast.config.settings import settings
from pagecast.core.exceptions import NotConfiguredError

logger = logging.getLogger(__name__)


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Client for verifying session tokens. Falls back to the service key when no anon key is set."""
        if cls._client is None:
            if not settings.identity_configured:
                raise NotConfiguredError("Authentication is not configured: SUPABASE_URL or SUPABASE_KEY is missing")
            key = settings.supabase_key or settings.supabase_service_role_key
            cls._client = create_client(settings.supabase_url, key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Only the role ledger and admin gateway use it."""
        if cls._service_client is None:
            if not settings.gateway_configured:
                raise NotConfiguredError(
                    "User management is not configured: SUPABASE_SERVICE_ROLE_KEY is missing"
                )
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def log_configuration_warnings() -> None:
    """Called once at startup; the API keeps serving with degraded endpoints."""
    for name in settings.missing_configuration():
        logger.warning("%s is not set; dependent endpoints will respond with 503", name)
    if not settings.gateway_configured:
        logger.warning("Administrative gateway is not configured; user creation and deletion are unavailable")
