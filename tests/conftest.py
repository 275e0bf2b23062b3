import os
import tempfile

# Point storage at a throwaway database before anything imports backend.config
_DB_DIR = tempfile.mkdtemp()
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["TELEGRAM_BOT_TOKEN"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from backend.services import round_service
from backend.storage.database import engine, init_db


@pytest.fixture
def db():
    SQLModel.metadata.drop_all(engine)
    init_db()
    round_service._trackers.clear()
    round_service._finished_at.clear()
    yield engine
    round_service._trackers.clear()
    round_service._finished_at.clear()


@pytest.fixture
def client(db) -> TestClient:
    from backend.main import app

    with TestClient(app) as client:
        yield client
