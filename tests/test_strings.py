import pytest

from bomboni.strings import Case, str_to_case


@pytest.mark.parametrize(
    ("value", "case", "expected"),
    [
        ("CommandResponse", Case.SNAKE, "command_response"),
        ("Status", Case.SNAKE, "status"),
        ("kind", Case.SCREAMING_SNAKE, "KIND"),
        ("etag", Case.SCREAMING_SNAKE, "ETAG"),
        ("status", Case.SCREAMING_SNAKE, "STATUS"),
    ],
)
def test_generated_names(value, case, expected):
    assert str_to_case(value, case) == expected


def test_pascal_of_snake():
    assert str_to_case("foo_bar", Case.PASCAL) == "FooBar"


def test_acronym_boundary():
    assert str_to_case("HTTPServer", Case.SNAKE) == "http_server"


def test_upper_digit_boundary():
    assert str_to_case("A1", Case.SNAKE) == "a_1"


def test_lower_digit_is_not_a_boundary():
    assert str_to_case("v2", Case.SNAKE) == "v2"


@pytest.mark.parametrize("value", ["foo_bar_baz", "alpha_beta", "single"])
def test_snake_pascal_round_trip(value):
    assert str_to_case(str_to_case(value, Case.PASCAL), Case.SNAKE) == value


@pytest.mark.parametrize("value", ["CommandResponse", "some-value here", "HTTPServer"])
def test_screaming_is_upper_snake(value):
    assert str_to_case(value, Case.SCREAMING_SNAKE) == str_to_case(value, Case.SNAKE).upper()


@pytest.mark.parametrize("value", ["CommandResponse", "some_value_here"])
def test_camel_matches_pascal(value):
    pascal = str_to_case(value, Case.PASCAL)
    assert str_to_case(value, Case.CAMEL) == pascal[0].lower() + pascal[1:]


@pytest.mark.parametrize("value", ["CommandResponse", "a b-c_d"])
def test_kebab_matches_snake(value):
    kebab = str_to_case(value, Case.KEBAB)
    assert kebab.replace("-", "_") == str_to_case(value, Case.SNAKE)


def test_empty_string():
    assert str_to_case("", Case.PASCAL) == ""
    assert str_to_case("__", Case.SNAKE) == ""