"""
Session manager: the single "current user" slot.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from ..core.entities import SanitizedAccount
from ..core.enums import StorageKey
from ..core.interfaces import KeyValueStore
from ..persistence.collection import PersistentSlot
from .credential_service import CredentialStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """States of the session manager."""
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionManager:
    """Holds at most one sanitized account, persisted under the ``user`` key.

    ``login`` waits ``login_delay`` seconds before checking credentials so a
    UI gets the same loading behaviour it would have against a remote
    service. Overlapping logins are not serialized; whichever finishes last
    owns the session.
    """

    DEFAULT_LOGIN_DELAY = 0.3

    def __init__(self, backend: KeyValueStore, credentials: CredentialStore,
                 login_delay: float = DEFAULT_LOGIN_DELAY):
        self._slot = PersistentSlot(backend, StorageKey.SESSION.value, SanitizedAccount)
        self._credentials = credentials
        self._login_delay = login_delay
        self._current: Optional[SanitizedAccount] = None

    @property
    def current_user(self) -> Optional[SanitizedAccount]:
        return self._current

    @property
    def state(self) -> SessionState:
        if self._current is None:
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def restore(self) -> Optional[SanitizedAccount]:
        """Pick up a session persisted by an earlier run, if it is well-formed."""
        self._current = self._slot.load()
        if self._current is not None:
            logger.debug("Restored session for account %s", self._current.id)
        return self._current

    async def login(self, username: str, password: str) -> bool:
        """Authenticate and persist the session. ``False`` on bad credentials."""
        if self._login_delay > 0:
            await asyncio.sleep(self._login_delay)

        account = self._credentials.verify(username, password)
        if account is None:
            logger.info("Login rejected")
            return False

        self._slot.store(account)
        self._current = account
        logger.info("Account %s logged in as %s", account.id, account.role.value)
        return True

    def logout(self) -> None:
        self._current = None
        self._slot.clear()
