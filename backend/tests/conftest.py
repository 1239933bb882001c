import os
import tempfile

# app.main creates tables on import; keep that away from the working directory
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="smartgrid-tests-"), "smartgrid.db"),
)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_db


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    from app.main import app as fastapi_app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


def sensor_item(node_id="N1", load=50.0, timestamp="2024-01-01T00:00:00Z", sensor_id=None):
    return {
        "sensorId": sensor_id or f"SENSOR-{node_id}",
        "nodeId": node_id,
        "timestamp": timestamp,
        "loadReading": load,
        "voltage": 410.0,
        "frequency": 60.1,
    }


def action_item(from_node="N1", to_node="N2", amount=5.0, timestamp="2024-01-01T00:00:00Z"):
    return {
        "fromNodeId": from_node,
        "toNodeId": to_node,
        "amount": amount,
        "actionType": "LOAD_TRANSFER",
        "timestamp": timestamp,
    }
