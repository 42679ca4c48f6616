from hive_idx.domain.parsing import is_empty, parse_flag, to_int


def test_to_int_is_loose():
    assert to_int("12") == 12
    assert to_int("12abc") == 12
    assert to_int("  7 ") == 7
    assert to_int("-3") == -3
    assert to_int(4.9) == 4
    assert to_int("abc") == 0
    assert to_int("") == 0
    assert to_int(None) == 0
    assert to_int(float("nan")) == 0


def test_is_empty_matches_truthiness_rules():
    for v in (None, "", "0", 0, 0.0, False, [], {}):
        assert is_empty(v) is True
    for v in ("Austin", "00", 3, "false", [1]):
        assert is_empty(v) is False


def test_parse_flag_tri_state():
    assert parse_flag("1") is True
    assert parse_flag("TRUE") is True
    assert parse_flag("Yes") is True
    assert parse_flag(True) is True
    assert parse_flag("0") is False
    assert parse_flag("false") is False
    assert parse_flag("NO") is False
    assert parse_flag(0) is False
    assert parse_flag("") is None
    assert parse_flag("maybe") is None
    assert parse_flag(None) is None
