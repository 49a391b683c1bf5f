import pytest

from helpers import FakeConnection, counter
from registry import RoomRegistry
from service import SignalingService
from session import DeviceSession


@pytest.fixture
def make_session():
    ids = counter("s")

    def _make(origin="http://relay.test"):
        return DeviceSession(ids(), FakeConnection(), origin=origin)

    return _make


@pytest.fixture
def registry():
    return RoomRegistry(code_generator=counter("room"))


@pytest.fixture
def service(registry):
    return SignalingService(registry=registry, session_id_generator=counter("dev"))


@pytest.fixture
def connect(service):
    def _connect(origin="http://relay.test"):
        connection = FakeConnection()
        session = service.connect(connection, origin=origin)
        return session, connection

    return _connect
