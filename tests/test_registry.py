import pytest

from helpers import sequence
from errors import RoomCodeExhausted, RoomFull, RoomNotFound
from registry import RoomRegistry
from session import Role


def test_create_room_stores_host_without_client(registry, make_session):
    host = make_session()
    code = registry.create_room(host)

    room = registry.get_room(code)
    assert room.host_session is host
    assert room.client_session is None
    assert code in registry
    assert len(registry) == 1


def test_codes_are_distinct_while_rooms_open(registry, make_session):
    codes = [registry.create_room(make_session()) for _ in range(50)]
    assert len(set(codes)) == 50


def test_create_room_regenerates_on_collision(make_session):
    registry = RoomRegistry(code_generator=sequence("aaaa", "aaaa", "aaaa", "bbbb"))
    first = registry.create_room(make_session())
    second = registry.create_room(make_session())

    assert first == "aaaa"
    assert second == "bbbb"


def test_create_room_gives_up_after_max_attempts(make_session):
    registry = RoomRegistry(code_generator=lambda: "same", max_attempts=3)
    registry.create_room(make_session())

    with pytest.raises(RoomCodeExhausted):
        registry.create_room(make_session())
    assert len(registry) == 1


def test_code_of_removed_room_can_be_reused(make_session):
    registry = RoomRegistry(code_generator=lambda: "same")
    code = registry.create_room(make_session())
    registry.remove_host(code)

    assert registry.create_room(make_session()) == "same"


def test_join_unknown_room_raises_not_found(registry, make_session):
    with pytest.raises(RoomNotFound):
        registry.join_room("nope", make_session())


def test_join_sets_client(registry, make_session):
    host, client = make_session(), make_session()
    code = registry.create_room(host)

    room = registry.join_room(code, client)
    assert room.client_session is client
    assert room.has_client


def test_join_full_room_keeps_existing_client(registry, make_session):
    host, client, intruder = make_session(), make_session(), make_session()
    code = registry.create_room(host)
    registry.join_room(code, client)

    with pytest.raises(RoomFull):
        registry.join_room(code, intruder)
    assert registry.get_room(code).client_session is client


def test_get_peer_returns_opposite_role(registry, make_session):
    host, client = make_session(), make_session()
    code = registry.create_room(host)
    registry.join_room(code, client)

    assert registry.get_peer(code, Role.HOST) is client
    assert registry.get_peer(code, Role.CLIENT) is host
    assert registry.get_peer(code, Role.UNASSIGNED) is None


def test_get_peer_skips_dead_connection(registry, make_session):
    host, client = make_session(), make_session()
    code = registry.create_room(host)
    registry.join_room(code, client)
    client.connection.live = False

    assert registry.get_peer(code, Role.HOST) is None


def test_get_peer_without_client_or_room(registry, make_session):
    code = registry.create_room(make_session())
    assert registry.get_peer(code, Role.HOST) is None
    assert registry.get_peer("missing", Role.CLIENT) is None


def test_remove_host_deletes_room(registry, make_session):
    code = registry.create_room(make_session())
    registry.remove_host(code)

    assert registry.get_room(code) is None
    with pytest.raises(RoomNotFound):
        registry.join_room(code, make_session())


def test_remove_client_keeps_room_joinable(registry, make_session):
    host, client, replacement = make_session(), make_session(), make_session()
    code = registry.create_room(host)
    registry.join_room(code, client)

    assert registry.remove_client(code) is client
    assert registry.get_room(code).client_session is None
    assert registry.join_room(code, replacement).client_session is replacement


def test_remove_on_missing_room_is_noop(registry):
    assert registry.remove_host("missing") is None
    assert registry.remove_client("missing") is None


def test_join_with_non_string_code_raises_not_found(registry, make_session):
    registry.create_room(make_session())
    for code in (None, 12345, ["room1"], {"room": "room1"}):
        with pytest.raises(RoomNotFound):
            registry.join_room(code, make_session())
