import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from battlepack.app import create_app
from battlepack.core import DocumentStore, make_engine
from tests.helpers import FakeClock


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def engine(tmp_path):
    db_engine = make_engine(f"sqlite:///{tmp_path / 'store.db'}")
    SQLModel.metadata.create_all(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture()
def store(engine):
    with Session(engine) as session:
        yield DocumentStore(session)


@pytest.fixture()
def api_app(tmp_path, clock):
    return create_app(f"sqlite:///{tmp_path / 'api.db'}", clock=clock)


@pytest.fixture()
def client(api_app):
    with TestClient(api_app) as test_client:
        yield test_client
