from relay.moderation import RateWindow, allow_chat, clean_name, clean_text


def test_clean_text_strips_control_characters():
    assert clean_text("he\x00ll\x07o\x7f") == "hello"


def test_clean_text_collapses_whitespace_and_trims():
    assert clean_text("  hello    there friend  ") == "hello there friend"


def test_control_characters_are_removed_before_collapsing():
    # Tabs and newlines are control characters, so the words fuse.
    assert clean_text("a\tb\nc") == "abc"


def test_clean_text_truncates_to_220():
    assert len(clean_text("x" * 500)) == 220


def test_clean_text_non_string_input():
    assert clean_text(None) == ""
    assert clean_text({"text": "hi"}) == ""
    assert clean_text(True) == ""
    assert clean_text(42) == "42"


def test_clean_name_truncates_to_16():
    assert clean_name("  a   very long player name indeed ") == "a very long play"


def test_rate_limit_allows_six_then_rejects():
    window = RateWindow()
    results = [allow_chat(window, 100.0 + i) for i in range(7)]
    assert results == [True] * 6 + [False]


def test_rejected_attempts_do_not_extend_the_count():
    window = RateWindow()
    for _ in range(6):
        assert allow_chat(window, 10.0)
    for _ in range(5):
        assert not allow_chat(window, 11.0)
    assert window.count == 6


def test_window_resets_only_after_it_has_fully_elapsed():
    window = RateWindow()
    for _ in range(6):
        assert allow_chat(window, 50.0)
    assert not allow_chat(window, 58.0)
    assert allow_chat(window, 58.01)
    assert window.count == 1
    assert window.window_start == 58.01


def test_window_is_measured_from_its_first_message():
    window = RateWindow()
    assert allow_chat(window, 0.0)
    for t in (7.0, 7.5, 7.9, 7.95, 7.99):
        assert allow_chat(window, t)
    assert not allow_chat(window, 8.0)
    assert allow_chat(window, 8.5)
