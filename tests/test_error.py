import pytest

from bomboni.any import DecodeError
from bomboni.code import Code
from bomboni.error import (
    CommonError,
    CommonErrorKind,
    GenericError,
    PathError,
    PathErrorStep,
    RequestError,
)
from bomboni.status import BadRequest, FieldViolation


class _PageSizeError(GenericError):
    def __init__(self) -> None:
        super().__init__("page size specified is invalid")

    def _violating_field_name(self) -> str:
        return "page_size"


def test_bad_request_details():
    err = RequestError.bad_request("Test", [("x", CommonError(CommonErrorKind.INVALID_ID))])
    assert str(err) == "invalid `Test` request"
    assert err.details()[0].unpack_into(BadRequest) == BadRequest(
        field_violations=[FieldViolation(field="x", description="invalid ID format")]
    )
    assert err.code() is Code.INVALID_ARGUMENT


def test_field_paths():
    not_found = CommonError(CommonErrorKind.NOT_FOUND)
    err = RequestError.generic(not_found).wrap_field("value").wrap_index(42).wrap_field("root")
    assert str(err) == "field `root[42].value` error: `not found`"

    err = RequestError.generic(not_found).wrap_index(42).wrap_field("value").wrap_request("Test")
    assert err.name == "Test"
    assert len(err.violations) == 1
    assert str(err.violations[0]) == "field `value[42]` error: `not found`"

    err = CommonError(CommonErrorKind.INVALID_ID).wrap("id").wrap_request("Test")
    assert err.name == "Test"
    assert [str(v) for v in err.violations] == ["field `id` error: `invalid ID format`"]


def test_parse_error_field_path():
    assert PathError.parse_path("test.x.field[42].y.{key}.value") == [
        PathErrorStep("field", "test"),
        PathErrorStep("field", "x"),
        PathErrorStep("field", "field"),
        PathErrorStep("index", 42),
        PathErrorStep("field", "y"),
        PathErrorStep("key", "key"),
        PathErrorStep("field", "value"),
    ]


def test_path_to_string_and_steps():
    error = PathError(
        [PathErrorStep("field", "a"), PathErrorStep("key", "k"), PathErrorStep("index", 3)],
        CommonError(CommonErrorKind.TYPE_MISMATCH),
    )
    assert error.path_to_string() == "a{k}[3]"
    assert str(PathErrorStep("key", "k")) == "{k}"
    assert str(PathErrorStep("index", 3)) == "[3]"


def test_field_parse_constructor():
    err = RequestError.field_parse("items[2].name", CommonError(CommonErrorKind.DUPLICATE_VALUE))
    assert str(err) == "field `items[2].name` error: `duplicate value`"


def test_insert_path():
    err = RequestError.path(
        [PathErrorStep("field", "a"), PathErrorStep("field", "c")],
        CommonError(CommonErrorKind.INVALID_ID),
    ).insert_path([PathErrorStep("field", "b")], 1)
    assert str(err) == "field `a.b.c` error: `invalid ID format`"


def test_insert_path_out_of_range():
    err = RequestError.field("a", CommonError(CommonErrorKind.INVALID_ID))
    with pytest.raises(IndexError):
        err.insert_path([PathErrorStep("field", "b")], 5)


def test_wrap_bad_request_fails():
    err = RequestError.bad_request("Test", [])
    with pytest.raises(ValueError):
        err.wrap_field("x")


def test_codes():
    assert CommonError(CommonErrorKind.RESOURCE_NOT_FOUND).code() is Code.NOT_FOUND
    assert CommonError(CommonErrorKind.ALREADY_EXISTS).code() is Code.ALREADY_EXISTS
    assert CommonError(CommonErrorKind.UNAUTHORIZED).code() is Code.PERMISSION_DENIED
    err = RequestError.field_key("m", "k", CommonError(CommonErrorKind.NOT_FOUND))
    assert err.code() is Code.NOT_FOUND
    assert err.to_status().code == int(Code.NOT_FOUND)
    assert err.details() == []


def test_common_error_messages():
    err = CommonError(CommonErrorKind.INVALID_NAME, expected_format="users/{id}", name="x")
    assert str(err) == "expected `users/{id}`, but got `x`."
    assert err.name == "x"
    parent = CommonError(CommonErrorKind.INVALID_PARENT, expected="a", parent="b")
    assert str(parent) == "expected resource parent `a`, but got `b`"
    with pytest.raises(TypeError):
        CommonError(CommonErrorKind.INVALID_NAME, name="x")


def test_generic_wrap_request_without_field_stays_generic():
    err = CommonError(CommonErrorKind.NOT_FOUND).wrap_request("Test")
    assert err.name is None
    assert str(err) == "not found"


def test_decode_error():
    err = RequestError.generic(DecodeError("bad bytes"))
    assert str(err) == "decode error: bad bytes"
    assert err.code() is Code.INVALID_ARGUMENT
    assert err.details() == []


def test_generic_rejects_other_errors():
    with pytest.raises(TypeError):
        RequestError.generic(ValueError("nope"))