import pytest

from errors import InvalidTransition
from schemas.messages import HostDisconnectedMessage
from session import Role, SessionState


def test_new_session_is_connected_and_unassigned(make_session):
    session = make_session()
    assert session.state is SessionState.CONNECTED
    assert session.role is Role.UNASSIGNED
    assert session.room_code is None
    assert session.is_live


def test_role_is_assigned_once(make_session):
    session = make_session()
    session.assign_role(Role.HOST, "r1")

    assert session.state is SessionState.ROLE_ASSIGNED
    assert session.role is Role.HOST
    assert session.room_code == "r1"
    with pytest.raises(InvalidTransition):
        session.assign_role(Role.CLIENT, "r2")
    assert session.role is Role.HOST
    assert session.room_code == "r1"


def test_cannot_assign_unassigned_role(make_session):
    with pytest.raises(ValueError):
        make_session().assign_role(Role.UNASSIGNED, "r1")


def test_pairing_requires_a_role(make_session):
    session = make_session()
    with pytest.raises(InvalidTransition):
        session.mark_paired()

    session.assign_role(Role.HOST, "r1")
    session.mark_paired()
    assert session.state is SessionState.PAIRED

    session.mark_unpaired()
    assert session.state is SessionState.ROLE_ASSIGNED


def test_send_goes_to_connection_while_live(make_session):
    session = make_session()
    assert session.send(HostDisconnectedMessage())
    assert session.connection.sent == [{"type": "host-disconnected"}]


def test_send_is_skipped_when_connection_dead(make_session):
    session = make_session()
    session.connection.live = False

    assert not session.is_live
    assert not session.send(HostDisconnectedMessage())
    assert session.connection.sent == []


def test_terminated_session_is_not_live(make_session):
    session = make_session()
    session.terminate()

    assert session.state is SessionState.TERMINATED
    assert not session.is_live
    assert not session.send(HostDisconnectedMessage())
    with pytest.raises(InvalidTransition):
        session.assign_role(Role.HOST, "r1")
