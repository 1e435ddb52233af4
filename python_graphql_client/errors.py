from typing import Any, Dict, List, Optional


class GraphQLClientError(Exception):
    pass


class CancellationError(GraphQLClientError):
    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceededError(CancellationError):
    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class ConfigurationError(GraphQLClientError):
    pass


class EncodeError(GraphQLClientError):
    pass


class TransportError(GraphQLClientError):
    pass


class StatusCodeError(GraphQLClientError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"graphql: server returned a non-200 status code: {status_code}")


class DecodeError(GraphQLClientError):
    def __init__(self, cause: Any):
        super().__init__(f"decoding response: {cause}")


class ServerError(GraphQLClientError):
    """First entry of the ``errors`` list of a response envelope.

    Every entry the server sent is kept in ``errors``; only the first one
    is used for the message.
    """

    def __init__(self, errors: List[Dict[str, Any]]):
        first = errors[0]
        self.message: str = first["message"]
        self.locations: Optional[List[Dict[str, int]]] = first.get("locations")
        self.path: Optional[List[Any]] = first.get("path")
        self.extensions: Optional[Dict[str, Any]] = first.get("extensions")
        self.errors = errors
        super().__init__("graphql: " + self.message)
