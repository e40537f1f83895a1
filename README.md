# bomboni

Small building blocks for API services, written with the standard library only.

## What is in it

- `bomboni.id.Id`: 128-bit sortable identifiers shown as 26 characters of
  Crockford base32. `Id.generate()` and `Id.generate_multiple(count)` make
  random time-ordered ids; `Id.from_worker_parts(time, worker, sequence)` and
  `Id.decode_worker()` pack and unpack a millisecond time, a worker number and
  a sequence number; `Id.parse(text)` reads the text form back.
- `bomboni.worker.WorkerIdGenerator`: hands out ids for one worker number,
  pausing for a second when its sequence number wraps around.
- `bomboni.date_time.UtcDateTime`: a UTC instant with nanosecond precision,
  with RFC 3339 parsing and formatting and conversion to and from `datetime`.
- Protobuf well-known types with their JSON forms:
  - `bomboni.duration.Duration` (`"3.000000001s"`), with `normalized()` and
    `timedelta` conversion;
  - `bomboni.timestamp.Timestamp` (RFC 3339 text), with `normalized()`;
  - `bomboni.field_mask.FieldMask` (comma-separated paths), with `contains()`
    and `masks()`;
  - `bomboni.wrappers`: `StringValue`, `BytesValue`, `BoolValue`,
    `Int32Value`, `UInt32Value`, `Int64Value`, `UInt64Value` (64-bit integers
    are written as strings), `FloatValue`, `DoubleValue`;
  - `bomboni.struct_value`: `Value`, `ListValue`, `Struct`, `NullValue` and
    `Empty`;
  - `bomboni.any.Any`, with `pack_from()` / `unpack_into()` and the
    `any_to_json` / `any_from_json` helpers that write an `@type` field.
- `bomboni.status.Status` and the standard error detail messages
  (`ErrorInfo`, `RetryInfo`, `DebugInfo`, `QuotaFailure`,
  `PreconditionFailure`, `BadRequest`, `FieldViolation`, `RequestInfo`,
  `ResourceInfo`, `Help`, `LocalizedMessage`). Detail messages encode to and
  decode from the protobuf binary wire format and camel-cased JSON; a status
  writes its code by name in JSON.
- `bomboni.code.Code`: the canonical RPC codes, with `to_status_code()` giving
  the matching HTTP status.
- `bomboni.error`: `RequestError` records which field of a request is at
  fault (`field[3].name{key}` style paths), and turns into a `Status` with a
  `BadRequest` detail. `CommonError` covers frequent cases such as
  `NOT_FOUND` or `INVALID_ID`.
- Helpers: `bomboni.strings.str_to_case` (snake, Pascal, camel and other
  cases), `bomboni.path_map.PathMap` (longest-prefix lookup of dotted type
  names), `bomboni.fs.visit_files` / `visit_files_contents` (recursive walk
  filtered by extension) and `bomboni.serde_helpers` (string, string-list and
  duration encodings, `is_truthy`, `merge_json`).

## Install

```
pip install .
```

## Examples

```python
from bomboni.duration import Duration
from bomboni.field_mask import FieldMask
from bomboni.id import Id

d = Duration.parse("10.000000002s")
print(d.seconds, d.nanos)                          # 10 2
print(Duration(0, 1_000_000_001).normalized())     # 1.000000001s

mask = FieldMask(["f.b", "f.c"])
print(mask.masks("f.b.d"))                         # True

print(Id.parse(str(Id.generate())))
```

Request errors keep the path of the offending field:

```python
from bomboni.error import CommonError, CommonErrorKind, RequestError

err = (
    RequestError.generic(CommonError(CommonErrorKind.NOT_FOUND))
    .wrap_field("value")
    .wrap_index(42)
    .wrap_field("root")
)
print(err)                       # field `root[42].value` error: `not found`
status = err.wrap_request("Get").to_status()
print(status.to_json())
```

## What it does not do

- It generates no code from `.proto` files and reads no descriptor sets; the
  message types it offers are the ones listed above.
- It has no RPC client or server and no HTTP framework integration. `Code`
  only maps codes to HTTP status numbers.
- `Status` itself has JSON conversion only, not a binary encoding.
- It has no database column adapters for ids or date times.

## Tests

```
pip install .[test]
pytest
```