import logging

from .registry import ChainRegistry
from .models import ChainInfo
from .enums import NetworkType, ChainStatus
from .sources import DocumentSource, LocalSource, RemoteSource, AsyncRemoteSource, StaticSource
from .exceptions import (
    ChainRegistryException,
    NotFound,
    ChainNotFound,
    SourceNotFound,
    NetworkError,
    HttpError,
    ParseError,
    RegistryIOError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "ChainRegistry",
    "ChainInfo",
    "NetworkType",
    "ChainStatus",
    "DocumentSource",
    "LocalSource",
    "RemoteSource",
    "AsyncRemoteSource",
    "StaticSource",
    "ChainRegistryException",
    "NotFound",
    "ChainNotFound",
    "SourceNotFound",
    "NetworkError",
    "HttpError",
    "ParseError",
    "RegistryIOError",
]
