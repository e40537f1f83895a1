import json

import pytest

from bomboni.any import Any, DecodeError
from bomboni.code import Code
from bomboni.duration import Duration
from bomboni.status import (
    BadRequest,
    DebugInfo,
    ErrorInfo,
    FieldViolation,
    Help,
    LocalizedMessage,
    PreconditionFailure,
    QuotaFailure,
    RequestInfo,
    ResourceInfo,
    RetryInfo,
    Status,
)


def test_status_serde():
    status = Status(
        Code.INVALID_ARGUMENT,
        "error",
        [Any.pack_from(ErrorInfo(reason="a", domain="b", metadata={}))],
    )
    text = json.dumps(status.to_json(), separators=(",", ":"))
    assert text == (
        '{"code":"INVALID_ARGUMENT","message":"error","details":'
        '[{"@type":"type.googleapis.com/google.rpc.ErrorInfo","reason":"a","domain":"b"}]}'
    )
    decoded = Status.from_json(json.loads(text))
    assert decoded == status


def test_type_urls():
    assert ErrorInfo.type_url() == "type.googleapis.com/google.rpc.ErrorInfo"
    assert BadRequest.type_url() == "type.googleapis.com/google.rpc.BadRequest"
    assert FieldViolation.type_url() == "type.googleapis.com/google.rpc.BadRequest.FieldViolation"


def test_retry_info_encoding_and_json():
    info = RetryInfo(retry_delay=Duration(1, 0))
    assert info.encode() == b"\n\x02\x08\x01"
    assert RetryInfo(retry_delay=Duration(3, 1)).to_json() == {"retryDelay": "3.000000001s"}
    assert RetryInfo().to_json() == {"retryDelay": None}
    assert RetryInfo.from_json({}) == RetryInfo()


def test_error_info_metadata_json():
    assert ErrorInfo(reason="a", domain="b", metadata={"k": "v"}).to_json() == {
        "reason": "a",
        "domain": "b",
        "metadata": {"k": "v"},
    }
    assert ErrorInfo.from_json({"reason": "a", "domain": "b"}) == ErrorInfo("a", "b", {})


def test_camel_case_keys():
    bad = BadRequest(field_violations=[FieldViolation("page_size", "invalid")])
    assert bad.to_json() == {
        "fieldViolations": [{"field": "page_size", "description": "invalid"}]
    }
    assert DebugInfo(stack_entries=["x"]).to_json() == {"stackEntries": ["x"], "detail": ""}


def test_missing_required_field():
    with pytest.raises(ValueError, match="reason"):
        ErrorInfo.from_json({"domain": "b"})


def test_wrong_field_type():
    with pytest.raises(TypeError):
        LocalizedMessage.from_json({"locale": 1, "message": "m"})


def test_decode_skips_unknown_fields():
    assert ErrorInfo.decode(b"\x20\x05\n\x01r") == ErrorInfo(reason="r")


def test_decode_truncated():
    with pytest.raises(DecodeError):
        ErrorInfo.decode(b"\n\x05ab")


def test_status_code_from_number():
    status = Status.from_json({"code": 5, "message": "gone", "details": []})
    assert status == Status(Code.NOT_FOUND, "gone", [])


def test_status_unknown_code_name():
    with pytest.raises(ValueError):
        Status.from_json({"code": "NOPE", "message": "", "details": []})


def test_status_unknown_code_value_to_json():
    with pytest.raises(ValueError):
        Status(99, "x", []).to_json()


def test_status_missing_field():
    with pytest.raises(ValueError, match="details"):
        Status.from_json({"code": "OK", "message": ""})