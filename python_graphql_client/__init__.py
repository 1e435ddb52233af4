"""Top-level package for python-graphql-client."""

__author__ = """Shogo Sawai"""
__email__ = "shogo.sawai+graphqlclient@gmail.com"
__version__ = "0.1.0"

from .aio import AsyncClient
from .client import Client
from .context import Context
from .errors import (
    CancellationError,
    ConfigurationError,
    DeadlineExceededError,
    DecodeError,
    EncodeError,
    GraphQLClientError,
    ServerError,
    StatusCodeError,
    TransportError,
)
from .request import File, Request

__all__ = [
    "AsyncClient",
    "CancellationError",
    "Client",
    "ConfigurationError",
    "Context",
    "DeadlineExceededError",
    "DecodeError",
    "EncodeError",
    "File",
    "GraphQLClientError",
    "Request",
    "ServerError",
    "StatusCodeError",
    "TransportError",
]
