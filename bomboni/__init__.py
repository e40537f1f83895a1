"""Building blocks for API services: sortable ids, UTC date times, protobuf well-known types, RPC status and request errors."""

__version__ = "0.1.0"