import os
import tempfile
import uuid

import pytest

# must be in place before shared.core.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="stockwise-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

from shared.core.database import Base, SessionLocal, engine  # noqa: E402
from shared.models import users  # noqa: E402,F401
from inventory_service.app.models import inventory_items  # noqa: E402,F401


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def owner_id():
    return str(uuid.uuid4())


@pytest.fixture()
def other_owner_id():
    return str(uuid.uuid4())


def item_data(**overrides):
    data = {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse",
        "category": "Electronics",
        "quantity": 100,
        "price": "49.99",
        "low_stock_threshold": 20,
    }
    data.update(overrides)
    return data
