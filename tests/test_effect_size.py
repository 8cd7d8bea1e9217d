import pytest

from stereoshift.errors import ArgumentError
from stereoshift.sizing.effect_size import parse_effect_size, split_specifier


@pytest.mark.parametrize("spec, width, expected", [
    ("50%", 200, 100),
    ("10px", 200, 10),
    ("10", 200, 10),
    ("2%", 640, 12),      # 12.8 truncates
    ("7.9px", 100, 7),
    ("1e1", 50, 10),
    ("0.5", 200, 0),
])
def test_resolves_pixels(spec, width, expected):
    assert parse_effect_size(spec, width) == expected


@pytest.mark.parametrize("spec, message", [
    ("0", "strictly positive"),
    ("-5%", "strictly positive"),
    ("-inf", "strictly positive"),
    ("abc", "number of pixels"),
    ("", "number of pixels"),
    ("px", "number of pixels"),
    ("10 pixels", "number of pixels"),
    ("nan", "normal float"),
    ("inf%", "normal float"),
    ("1e-320", "normal float"),
])
def test_rejects_bad_specifiers(spec, message):
    with pytest.raises(ArgumentError, match=message):
        parse_effect_size(spec, 200)


def test_error_message_is_prefixed():
    with pytest.raises(ArgumentError) as exc:
        parse_effect_size("abc", 200)
    assert str(exc.value).startswith("Bad argument: size")


def test_split_specifier():
    assert split_specifier("3%") == (True, "3")
    assert split_specifier("3px") == (False, "3")
    assert split_specifier("3") == (False, "3")


def test_huge_sizes_resolve():
    assert parse_effect_size("1e20px", 4) == int(1e20)
    assert parse_effect_size("1e39", 4) == int(1e39)


def test_percent_overflow_does_not_raise():
    assert parse_effect_size("1e308%", 1000) > 0
