import logging

from supabase import Client

from pagecast.core.exceptions import ConflictError, PartialFailureError, UpstreamError
from pagecast.core.policy import Role
from pagecast.modules.admin.provisioning import deprovision_account, provision_account
from pagecast.modules.admin.schemas import CreatedAccount
from pagecast.modules.auth.service import forget_account
from pagecast.modules.preferences.service import PreferenceService
from pagecast.modules.profiles.service import RoleLedger

logger = logging.getLogger(__name__)

_DUPLICATE_MARKERS = ("already been registered", "already registered", "already exists", "email_exists")


def _is_duplicate_email(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in _DUPLICATE_MARKERS)


class AdminGateway:
    """Account creation and deletion through the Supabase Auth admin API.

    Requires a service-role client. Callers must have run the policy checks;
    the gateway does not look at the caller's role.
    """

    def __init__(self, supabase: Client, ledger: RoleLedger, preferences: PreferenceService):
        self.supabase = supabase
        self.ledger = ledger
        self.preferences = preferences

    def create_account(self, email: str, password: str, requested_role: Role) -> CreatedAccount:
        """Create the auth user, then provision and assign its role.

        The two steps are not atomic. If anything fails after the auth user
        exists, PartialFailureError carries the new id so an operator can fix
        the role by hand; nothing is retried.
        """
        try:
            response = self.supabase.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
            })
        except Exception as e:
            message = str(e)
            if _is_duplicate_email(message):
                logger.info("Create user rejected, email already registered")
                raise ConflictError("A user with this email already exists")
            logger.error("Supabase create_user failed: %s", message)
            raise UpstreamError(message)

        user = getattr(response, "user", None)
        if not user:
            raise UpstreamError("Failed to create user")

        try:
            provision_account(self.ledger, self.preferences, user.id, user.email or email)
            profile = self.ledger.set_role(user.id, requested_role)
        except Exception as e:
            logger.error("User %s created but role assignment to %s failed: %s", user.id, requested_role.value, e)
            raise PartialFailureError(
                account_id=user.id,
                message=f"User created but role assignment failed: {e}",
            )

        logger.info("Created user %s with role %s", user.id, profile.role.value)
        return CreatedAccount(id=user.id, email=user.email or email, role=profile.role)

    def delete_account(self, account_id: str) -> None:
        try:
            self.supabase.auth.admin.delete_user(account_id)
        except Exception as e:
            logger.error("Supabase delete_user failed for %s: %s", account_id, e)
            raise UpstreamError(str(e))
        deprovision_account(self.ledger, account_id)
        forget_account(account_id)
        logger.info("Deleted user %s", account_id)
