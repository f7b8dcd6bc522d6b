"""
Pytest configuration for SchoolDesk tests.

Async tests run on the asyncio backend only.
"""
import pytest

from schooldesk.main import SchoolDeskPlatform
from schooldesk.persistence import MemoryKeyValueStore
from schooldesk.services import CredentialStore, SessionManager


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def backend():
    return MemoryKeyValueStore()


@pytest.fixture
def credentials(backend):
    store = CredentialStore(backend)
    store.ensure_seeded()
    return store


@pytest.fixture
def session(backend, credentials):
    return SessionManager(backend, credentials, login_delay=0)


@pytest.fixture
def platform():
    return SchoolDeskPlatform({"storage_type": "memory", "login_delay": 0}).init()
