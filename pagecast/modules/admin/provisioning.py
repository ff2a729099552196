"""
Account lifecycle hooks.

Run synchronously by the admin gateway right after the identity store creates or
deletes an account. Both are idempotent, so they are safe to run even when the
database already did the same work through its own triggers or cascades.
"""

import logging

from pagecast.modules.preferences.service import PreferenceService
from pagecast.modules.profiles.schemas import Profile
from pagecast.modules.profiles.service import RoleLedger

logger = logging.getLogger(__name__)


def provision_account(
    ledger: RoleLedger,
    preferences: PreferenceService,
    account_id: str,
    email: str,
) -> Profile:
    profile = ledger.create(account_id, email)
    preferences.ensure_defaults(account_id)
    logger.debug("Provisioned profile and preferences for %s", account_id)
    return profile


def deprovision_account(ledger: RoleLedger, account_id: str) -> None:
    if ledger.delete(account_id):
        logger.debug("Removed profile rows for %s", account_id)
