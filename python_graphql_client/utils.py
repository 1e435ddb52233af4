import json

from typing import Any, Tuple


def split_key_value(value: str, sep: str = "=") -> Tuple[str, str]:
    key, found, rest = value.partition(sep)
    if not found or not key.strip():
        raise ValueError(f"expected 'name{sep}value', got {value!r}")
    return key.strip(), rest.strip()


def parse_variable(value: str) -> Tuple[str, Any]:
    "name=value, value decoded as JSON when it is valid JSON"
    key, raw = split_key_value(value)
    try:
        return key, json.loads(raw)
    except ValueError:
        return key, raw


def parse_header(value: str) -> Tuple[str, str]:
    return split_key_value(value, sep=":")
