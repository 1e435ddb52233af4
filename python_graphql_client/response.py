"""Decoding of the ``{"data": ..., "errors": [...]}`` envelope."""
import dataclasses
import json

from collections.abc import MutableMapping, MutableSequence
from typing import Any, Dict, List

from .errors import DecodeError, ServerError, StatusCodeError

HTTP_OK = 200


class EnvelopeError(ValueError):
    pass


def bind_data(data: Any, response: Any) -> None:
    if response is None or data is None:
        return
    if isinstance(response, MutableMapping):
        if not isinstance(data, dict):
            raise EnvelopeError(f"cannot decode {type(data).__name__} into {type(response).__name__}")
        response.clear()
        response.update(data)
    elif isinstance(response, MutableSequence):
        if not isinstance(data, list):
            raise EnvelopeError(f"cannot decode {type(data).__name__} into {type(response).__name__}")
        response[:] = data
    else:
        if not isinstance(data, dict):
            raise EnvelopeError(f"cannot decode {type(data).__name__} into {type(response).__name__}")
        if dataclasses.is_dataclass(response):
            names = {f.name: f.name for f in dataclasses.fields(response)}
            lowered = {name.lower(): name for name in names}
            for key, value in data.items():
                name = names.get(key) or lowered.get(key.lower())
                if name:
                    setattr(response, name, value)
        else:
            for key, value in data.items():
                setattr(response, key, value)


def parse_envelope(body: bytes) -> Dict[str, Any]:
    envelope = json.loads(body)
    if envelope is None:
        return {}
    if not isinstance(envelope, dict):
        raise EnvelopeError(f"expected a JSON object, got {type(envelope).__name__}")
    errors = envelope.get("errors")
    if errors is not None:
        if not isinstance(errors, list):
            raise EnvelopeError("errors must be a list")
        for entry in errors:
            if not isinstance(entry, dict):
                raise EnvelopeError("error entries must be objects")
            if entry.get("message") is None:
                entry["message"] = ""
            elif not isinstance(entry["message"], str):
                raise EnvelopeError("error message must be a string")
    return envelope


def decode_response(status_code: int, body: bytes, response: Any) -> None:
    """Bind ``data`` of the envelope in ``body`` into ``response``.

    An undecodable body is reported as a status code error unless the
    server answered 200. Server errors win over any data received.
    """
    try:
        envelope = parse_envelope(body)
        errors: List[Dict[str, Any]] = envelope.get("errors") or []
        if not errors:
            bind_data(envelope.get("data"), response)
    except (ValueError, TypeError, AttributeError) as err:
        if status_code != HTTP_OK:
            raise StatusCodeError(status_code) from err
        raise DecodeError(err) from err
    if errors:
        raise ServerError(errors)
