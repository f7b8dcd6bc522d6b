"""
Credential store: seeded demo accounts and password verification.
"""

import logging
from typing import Callable, List, Optional, Sequence

from ..core.entities import Account, SanitizedAccount
from ..core.enums import StorageKey
from ..core.interfaces import KeyValueStore
from ..core.seed_data import demo_accounts
from ..persistence.collection import PersistentCollection

logger = logging.getLogger(__name__)


def require_unique_usernames(accounts: Sequence[Account]) -> None:
    usernames = [account.username.strip().lower() for account in accounts]
    if len(set(usernames)) != len(usernames):
        raise ValueError("usernames must be case-insensitively unique")


class CredentialStore:
    """Persistent collection of accounts, consulted only by the session manager."""

    def __init__(self, backend: KeyValueStore,
                 seed_accounts: Optional[Callable[[], List[Account]]] = None):
        self._accounts = PersistentCollection(
            backend, StorageKey.USERS.value, Account, check=require_unique_usernames,
        )
        self._seed_accounts = seed_accounts or demo_accounts

    def ensure_seeded(self) -> bool:
        """Write the demo accounts if no credential collection exists.

        Only acts on absence, so repeated calls are no-ops. Returns whether
        the seed was written.
        """
        if self._accounts.exists():
            return False

        accounts = self._seed_accounts()
        require_unique_usernames(accounts)

        self._accounts.replace(accounts)
        logger.info("Seeded %d demo accounts", len(accounts))
        return True

    def verify(self, username: str, password: str) -> Optional[SanitizedAccount]:
        """Return the matching account without its password, or ``None``.

        An unknown username and a wrong password give the same ``None``.
        """
        for account in self._accounts.reload():
            if account.matches_username(username) and account.password == password:
                return account.sanitized()
        return None

    def accounts(self) -> List[SanitizedAccount]:
        """All accounts, sanitized."""
        return [account.sanitized() for account in self._accounts.items]
