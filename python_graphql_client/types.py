from typing import Dict, TypedDict


class Config(TypedDict, total=False):
    endpoint: str
    use_multipart_form: bool
    headers: Dict[str, str]
    timeout: float
