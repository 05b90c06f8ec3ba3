import pytest

from utils.input_utils import parse_menu_choice, parse_swap_count, is_confirmed


@pytest.mark.parametrize("raw,expected", [
    ("1", "generate"),
    ("2", "env"),
    (" 3 ", "generated"),
    ("4", "all"),
    ("5", None),
    ("0", None),
    ("", None),
    ("one", None),
    (None, None),
])
def test_parse_menu_choice(raw, expected):
    assert parse_menu_choice(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("1", 1),
    (" 12 ", 12),
    ("0", None),
    ("-3", None),
    ("2.5", None),
    ("3abc", None),
    ("abc", None),
    ("", None),
    ("٣", None),
    (None, None),
])
def test_parse_swap_count(raw, expected):
    assert parse_swap_count(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("y", True),
    ("Y", True),
    ("yes", True),
    (" YES ", True),
    ("n", False),
    ("no", False),
    ("", False),
    ("yep", False),
    (None, False),
])
def test_is_confirmed(raw, expected):
    assert is_confirmed(raw) is expected
