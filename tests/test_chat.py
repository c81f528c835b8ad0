"""Chat relay through the coordinator: rate limiting and sanitization."""


def chat(coordinator, conn, text, name="anon", **extra):
    coordinator.handle_message(conn, {"type": "CHAT", "text": text, "name": name, **extra})


def player_lines(peer):
    return [m for m in peer.of_type("CHAT") if not m.get("system")]


def test_chat_is_broadcast_with_server_fields(coordinator, clock, host_room, join):
    host, room = host_room
    guest = join(room.code)
    coordinator.handle_message(guest, {"type": "CLAIM_SEAT", "seat": "p2"})

    chat(coordinator, guest, "  good   game ", name="  Bob\x00by  ", seat="p1")

    expected = {
        "type": "CHAT",
        "ts": int(clock() * 1000),
        "from": guest.client_id,
        "seat": "p2",
        "name": "Bobby",
        "text": "good game",
    }
    assert player_lines(host.peer) == [expected]
    assert player_lines(guest.peer) == [expected]


def test_client_claimed_seat_is_ignored(coordinator, host_room):
    host, room = host_room
    chat(coordinator, host, "hi", seat="p1")
    assert player_lines(host.peer)[-1]["seat"] == "spectator"


def test_player_lines_omit_system_flag(coordinator, host_room):
    host, _ = host_room
    chat(coordinator, host, "hello")
    assert "system" not in player_lines(host.peer)[-1]


def test_system_notices_carry_only_server_fields(host_room):
    host, _ = host_room
    notice = host.peer.of_type("CHAT")[0]
    assert set(notice) == {"type", "ts", "system", "text"}


def test_blank_text_is_dropped_silently(coordinator, host_room):
    host, _ = host_room
    host.peer.clear()
    chat(coordinator, host, " \x01\x02   ")
    chat(coordinator, host, None)
    assert host.peer.sent == []


def test_long_text_and_name_are_truncated(coordinator, host_room):
    host, _ = host_room
    chat(coordinator, host, "y" * 1000, name="n" * 100)
    line = player_lines(host.peer)[-1]
    assert len(line["text"]) == 220
    assert line["name"] == "n" * 16


def test_seventh_message_in_window_is_rate_limited(coordinator, clock, host_room, join):
    host, room = host_room
    guest = join(room.code)
    guest.peer.clear()
    host.peer.clear()

    for i in range(6):
        chat(coordinator, host, f"msg {i}")
        clock.advance(1)
    chat(coordinator, host, "one too many")

    assert len(player_lines(guest.peer)) == 6
    assert host.peer.last("ERROR") == {"type": "ERROR", "message": "Chat rate limit. Slow down."}
    assert guest.peer.of_type("ERROR") == []


def test_chat_allowed_again_after_window(coordinator, clock, host_room):
    host, _ = host_room
    for _ in range(6):
        chat(coordinator, host, "spam")
    chat(coordinator, host, "blocked")
    assert len(player_lines(host.peer)) == 6

    clock.advance(8.5)
    chat(coordinator, host, "back again")
    assert player_lines(host.peer)[-1]["text"] == "back again"


def test_rate_limit_is_per_connection(coordinator, host_room, join):
    host, room = host_room
    guest = join(room.code)
    for _ in range(7):
        chat(coordinator, host, "host talking")
    chat(coordinator, guest, "guest still fine")
    assert player_lines(host.peer)[-1]["text"] == "guest still fine"
    assert guest.peer.of_type("ERROR") == []


def test_empty_messages_count_toward_the_limit(coordinator, host_room):
    host, _ = host_room
    for _ in range(6):
        chat(coordinator, host, "   ")
    chat(coordinator, host, "real message")
    assert host.peer.last("ERROR")["message"] == "Chat rate limit. Slow down."
    assert player_lines(host.peer) == []


def test_system_notices_bypass_rate_limit(coordinator, host_room, join):
    host, room = host_room
    for _ in range(6):
        chat(coordinator, host, "spam")
    host.peer.clear()

    guest = join(room.code)
    coordinator.handle_message(host, {"type": "CLAIM_SEAT", "seat": "p1"})

    texts = [m["text"] for m in host.peer.of_type("CHAT") if m.get("system")]
    assert texts == ["A player joined the room.", "Seat P1 claimed."]
    assert host.peer.of_type("ERROR") == []
    assert guest.client_id in room.clients
