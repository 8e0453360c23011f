import pytest

from apps.call_routing.area_code import extract_area_code


@pytest.mark.parametrize("number, expected", [
    ("4155551234", "415"),
    ("(415) 555-1234", "415"),
    ("415.555.1234", "415"),
    ("+14155551234", "415"),
    ("1-650-555-0000", "650"),
    ("+442071838750", "442"),
    ("61412345678901", "614"),
])
def test_area_code_from_long_numbers(number, expected):
    assert extract_area_code(number) == expected


@pytest.mark.parametrize("number", [
    "555-1234",
    "5551234",
    "123456789",
    "(415) 555-123",
    "anonymous",
    "",
    None,
])
def test_short_or_missing_numbers_have_no_area_code(number):
    assert extract_area_code(number) == ""


def test_ten_digit_numbers_use_leading_digits():
    for digits in ("2125550000", "9999999999", "0001112222"):
        assert extract_area_code(digits) == digits[:3]


def test_non_string_input_does_not_raise():
    assert extract_area_code(4155551234) == ""
