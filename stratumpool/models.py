"""Pool descriptor shared by the config loader and session clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from .algorithms import DEFAULT_TABLE, AlgorithmId, AlgorithmTable
from .credentials import Credentials, parse_userpass
from .endpoint import DEFAULT_PORT, Endpoint, parse_endpoint
from .errors import AlgorithmNotEnabledError, EndpointParseError
from .variants import VariantId, coerce_variant, effective_variant

LOG = logging.getLogger(__name__)

KEEPALIVE_TIMEOUT = 60

NICEHASH_MARKER = ".nicehash.com"
MINERGATE_MARKER = ".minergate.com"


@dataclass(slots=True)
class PoolDescriptor:
    """Normalized description of one pool endpoint.

    Descriptors are built and adjusted during startup and should be treated
    as read-only afterwards. Nothing here is synchronized; callers sharing a
    descriptor between workers must not mutate it while others read it.

    Equality compares every stored field, including the raw url and the
    configured (not the effective) variant, so ``pool.com`` and
    ``pool.com:3333`` describe the same endpoint but are not equal.
    """

    endpoint: Endpoint = field(default_factory=Endpoint)
    credentials: Credentials = field(default_factory=Credentials)
    algorithm: AlgorithmId = AlgorithmId.INVALID
    configured_variant: VariantId = VariantId.AUTO
    nicehash: bool = False
    keep_alive: int = 0

    @classmethod
    def from_url(cls, url: str, *, strict: bool = False) -> PoolDescriptor:
        """Build a descriptor from a connection string.

        A rejected string leaves the descriptor in its default, invalid state
        unless ``strict`` is set, in which case the parse error propagates.
        """

        pool = cls()
        try:
            pool.parse(url)
        except EndpointParseError as exc:
            if strict:
                raise
            LOG.debug("Rejected pool url", extra={"url": url, "reason": exc.kind.value})
        return pool

    @classmethod
    def from_parts(
        cls,
        host: str,
        port: int = DEFAULT_PORT,
        user: str = "",
        password: str = "",
        keep_alive: int = 0,
        nicehash: bool = False,
        variant: int = VariantId.AUTO,
    ) -> PoolDescriptor:
        """Build a descriptor from discrete fields, synthesizing ``host:port`` as its url.

        The port is truncated to 16 bits; an out-of-range variant raises
        :class:`InvalidVariantError`.
        """

        port &= 0xFFFF
        return cls(
            endpoint=Endpoint(host=host, port=port, url=f"{host}:{port}"),
            credentials=Credentials(user=user, password=password),
            configured_variant=coerce_variant(variant),
            nicehash=nicehash,
            keep_alive=keep_alive,
        )

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int:
        return self.endpoint.port

    @property
    def url(self) -> str:
        return self.endpoint.url

    @property
    def user(self) -> str:
        return self.credentials.user

    @property
    def password(self) -> str:
        return self.credentials.password

    @property
    def variant(self) -> VariantId:
        """Variant to hash with, after algorithm-forced overrides."""

        return effective_variant(self.algorithm, self.configured_variant)

    @property
    def is_valid(self) -> bool:
        return bool(self.endpoint.host)

    def parse(self, url: str) -> None:
        """Replace the endpoint with one parsed from ``url``; untouched on error."""

        self.endpoint = parse_endpoint(url)

    def set_userpass(self, userpass: str) -> None:
        """Set user and password from ``user:password``; untouched on error."""

        self.credentials = parse_userpass(userpass)

    def set_user(self, user: str) -> None:
        self.credentials = replace(self.credentials, user=user)

    def set_password(self, password: str) -> None:
        self.credentials = replace(self.credentials, password=password)

    def set_variant(self, variant: int) -> None:
        """Store a raw variant ordinal; raises :class:`InvalidVariantError` if out of range."""

        self.configured_variant = coerce_variant(variant)

    def set_algorithm(self, algorithm: AlgorithmId | str, table: AlgorithmTable = DEFAULT_TABLE) -> None:
        """Assign an algorithm by id or by name.

        Names go through :meth:`AlgorithmTable.resolve`, so an unknown name
        stores ``AlgorithmId.INVALID`` and lets :meth:`adjust` fill in the
        default later.
        """

        if isinstance(algorithm, str):
            self.algorithm = table.resolve(algorithm)
            return
        if algorithm != AlgorithmId.INVALID and not table.is_enabled(algorithm):
            raise AlgorithmNotEnabledError(f"Algorithm {AlgorithmId(algorithm).name} is not enabled")
        self.algorithm = AlgorithmId(algorithm)

    def set_keep_alive(self, keep_alive: bool | int) -> None:
        """``True`` enables the default timeout, integers are seconds (negative means off)."""

        if isinstance(keep_alive, bool):
            self.keep_alive = KEEPALIVE_TIMEOUT if keep_alive else 0
        else:
            self.keep_alive = max(keep_alive, 0)

    def set_nicehash(self, nicehash: bool) -> None:
        self.nicehash = nicehash

    def adjust(self, algorithm: AlgorithmId) -> None:
        """Fill in the default algorithm and apply host-based overrides.

        Host markers are matched as plain substrings anywhere in the host.
        """

        if not self.is_valid:
            return
        if self.algorithm == AlgorithmId.INVALID:
            self.algorithm = algorithm
        if NICEHASH_MARKER in self.host:
            self.keep_alive = 0
            self.nicehash = True
        if MINERGATE_MARKER in self.host:
            self.keep_alive = 0

    def algorithm_name(self, short: bool = False, table: AlgorithmTable = DEFAULT_TABLE) -> str:
        return table.name_of(self.algorithm, short)

    def log_summary(self, logger: logging.Logger = LOG, table: AlgorithmTable = DEFAULT_TABLE) -> None:
        """Write the descriptor to ``logger``: url at INFO, the rest at DEBUG."""

        logger.info("url:       %s", self.url)
        logger.debug("host:      %s", self.host)
        logger.debug("port:      %d", self.port)
        logger.debug("user:      %s", self.user)
        logger.debug("pass:      %s", self.password)
        logger.debug("algo:      %s/%d", self.algorithm_name(table=table), self.variant)
        logger.debug("nicehash:  %d", self.nicehash)
        logger.debug("keepAlive: %d", self.keep_alive)


__all__ = ["KEEPALIVE_TIMEOUT", "MINERGATE_MARKER", "NICEHASH_MARKER", "PoolDescriptor"]
