import pytest

import config
from core import database
from core.validation import MemberInput, SubscriptionInput
from services import member_service, subscription_service
from services.file_manager import init_paths


@pytest.fixture
def data_dir(tmp_path):
    """Points every config path at a fresh temporary folder."""
    init_paths(tmp_path)
    yield tmp_path
    database.close_db()
    for name in ("BASE_FOLDER", "DB_FILE", "BACKUP_FOLDER", "STATE_FILE", "LOG_FILE"):
        setattr(config, name, None)


@pytest.fixture
def store(data_dir):
    """An initialised, empty store."""
    conn = database.init_db()
    yield conn
    database.close_db()


@pytest.fixture
def add_member(store):
    def _add(name, email, phone=None):
        return member_service.add_member(MemberInput(name=name, email=email, phone=phone))
    return _add


@pytest.fixture
def add_plan(store):
    def _add(name, duration_days=30, price=25.0, description=""):
        return subscription_service.add_subscription(
            SubscriptionInput(name=name, description=description, duration_days=duration_days, price=price)
        )
    return _add
