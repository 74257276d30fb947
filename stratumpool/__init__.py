"""Parse and normalize stratum pool endpoint descriptors."""

from __future__ import annotations

from .algorithms import DEFAULT_TABLE, AlgorithmId, AlgorithmSpec, AlgorithmTable
from .credentials import Credentials, parse_userpass
from .endpoint import DEFAULT_PORT, Endpoint, parse_endpoint
from .errors import (
    AlgorithmNotEnabledError,
    CredentialParseError,
    EndpointParseError,
    InvalidVariantError,
    ParseErrorKind,
    PoolError,
)
from .models import KEEPALIVE_TIMEOUT, PoolDescriptor
from .variants import VariantId, effective_variant

__version__ = "0.1.0"

__all__ = [
    "AlgorithmId",
    "AlgorithmNotEnabledError",
    "AlgorithmSpec",
    "AlgorithmTable",
    "CredentialParseError",
    "Credentials",
    "DEFAULT_PORT",
    "DEFAULT_TABLE",
    "Endpoint",
    "EndpointParseError",
    "InvalidVariantError",
    "KEEPALIVE_TIMEOUT",
    "ParseErrorKind",
    "PoolDescriptor",
    "PoolError",
    "VariantId",
    "effective_variant",
    "parse_endpoint",
    "parse_userpass",
]
