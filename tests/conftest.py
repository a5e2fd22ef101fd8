import sys
from pathlib import Path

import pytest

# Ensure src/ on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_SRC_DIR = _THIS_DIR.parent / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from core.data_store import DataStore  # noqa: E402
from schemas.user import User  # noqa: E402


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'review_hub_test.db'}"


@pytest.fixture()
def store(db_url):
    data_store = DataStore(db_url).connect()
    yield data_store
    data_store.close()


@pytest.fixture()
def make_user(store):
    """Register a user and return the stored record."""

    def _make_user(user_name, role="Student", password="Passw0rd!"):
        return store.users.register(User(user_name=user_name, password=password, role=role))

    return _make_user
