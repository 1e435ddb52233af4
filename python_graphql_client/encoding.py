import json

from typing import Any, List, Optional, Tuple

from .errors import EncodeError
from .request import Request

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
ACCEPT = "application/json; charset=utf-8"


def encode_json_body(request: Request) -> bytes:
    body = {"query": request.query, "variables": request.vars}
    try:
        return json.dumps(body, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as err:
        raise EncodeError(f"encode body: {err}") from err


def encode_variables(request: Request) -> Optional[str]:
    "variables form field, None when no variable was set"
    if not request.vars:
        return None
    try:
        return json.dumps(request.vars, separators=(",", ":"))
    except (TypeError, ValueError) as err:
        raise EncodeError(f"encode variables: {err}") from err


def read_files(request: Request) -> List[Tuple[str, str, bytes]]:
    """Drain every attached file into memory.

    Each reader is consumed once, in attachment order.
    """
    results = []
    for f in request.files:
        try:
            content: Any = f.reader.read()
        except (OSError, ValueError) as err:
            raise EncodeError(f"preparing file: {err}") from err
        if isinstance(content, str):
            content = content.encode("utf-8")
        results.append((f.field, f.name, bytes(content)))
    return results
