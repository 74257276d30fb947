"""Pool configuration loading helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import tomllib

from pydantic import BaseModel, Field

from .algorithms import AlgorithmTable
from .errors import PoolError
from .models import PoolDescriptor

LOG = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".config" / "stratumpool" / "config.toml"


class PoolConfig(BaseModel):
    """Pool entry stored in config.toml."""

    url: str
    userpass: str | None = None
    user: str | None = None
    password: str | None = None
    algo: str | None = None
    variant: int | None = None
    keepalive: bool | int | None = None
    nicehash: bool | None = None


class AppConfig(BaseModel):
    """Shape of the configuration file."""

    algo: str = "cryptonight"
    variant: int = -1
    algorithms: dict[str, bool] = Field(default_factory=dict)
    pools: list[PoolConfig] = Field(default_factory=list)

    def algorithm_table(self) -> AlgorithmTable:
        """Algorithm slots enabled by the ``[algorithms]`` flags."""

        return AlgorithmTable.from_flags(self.algorithms)

    def with_pools(self, pools: list[PoolConfig]) -> AppConfig:
        """Return a copy with the pool list replaced."""

        return self.model_copy(update={"pools": pools})


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        data = _read_config_file(path or CONFIG_FILE)
    except FileNotFoundError:
        return AppConfig()
    except (tomllib.TOMLDecodeError, OSError):
        LOG.warning("Could not read config file", extra={"path": str(path or CONFIG_FILE)})
        return AppConfig()

    return AppConfig(
        algo=data.get("algo", AppConfig.model_fields["algo"].default),
        variant=data.get("variant", AppConfig.model_fields["variant"].default),
        algorithms=data.get("algorithms", {}),
        pools=[PoolConfig(**pool) for pool in data.get("pools", [])],
    )


def build_pools(config: AppConfig, table: AlgorithmTable | None = None) -> list[PoolDescriptor]:
    """Turn configured pool entries into adjusted descriptors.

    Entries whose url or credentials are rejected are logged and skipped.
    """

    table = table or config.algorithm_table()
    default_algorithm = table.resolve(config.algo)
    pools: list[PoolDescriptor] = []
    for entry in config.pools:
        pool = PoolDescriptor.from_url(entry.url)
        if not pool.is_valid:
            LOG.warning("Skipping pool with invalid url", extra={"url": entry.url})
            continue
        try:
            _apply_entry(pool, entry, config, table)
        except PoolError as exc:
            LOG.warning("Skipping misconfigured pool", extra={"url": entry.url, "error": str(exc)})
            continue
        pool.adjust(default_algorithm)
        pools.append(pool)
    return pools


def _apply_entry(pool: PoolDescriptor, entry: PoolConfig, config: AppConfig, table: AlgorithmTable) -> None:
    if entry.userpass is not None:
        pool.set_userpass(entry.userpass)
    if entry.user is not None:
        pool.set_user(entry.user)
    if entry.password is not None:
        pool.set_password(entry.password)
    pool.set_variant(entry.variant if entry.variant is not None else config.variant)
    if entry.algo:
        pool.set_algorithm(entry.algo, table)
    if entry.keepalive is not None:
        pool.set_keep_alive(entry.keepalive)
    if entry.nicehash is not None:
        pool.set_nicehash(entry.nicehash)


def _read_config_file(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    if not isinstance(raw, dict):
        return data
    algo = raw.get("algo")
    if isinstance(algo, str):
        data["algo"] = algo
    variant = raw.get("variant")
    if isinstance(variant, int) and not isinstance(variant, bool):
        data["variant"] = variant
    algorithms = raw.get("algorithms")
    if isinstance(algorithms, dict):
        data["algorithms"] = {str(name): bool(enabled) for name, enabled in algorithms.items()}
    pools = raw.get("pools")
    if isinstance(pools, list):
        parsed_pools: list[dict[str, object]] = []
        for pool in pools:
            if not isinstance(pool, dict):
                continue
            parsed: dict[str, object] = {}
            for key in ("url", "userpass", "user", "password", "algo"):
                value = pool.get(key)
                if isinstance(value, str):
                    parsed[key] = value
            pool_variant = pool.get("variant")
            if isinstance(pool_variant, int) and not isinstance(pool_variant, bool):
                parsed["variant"] = pool_variant
            keepalive = pool.get("keepalive")
            if isinstance(keepalive, (bool, int)):
                parsed["keepalive"] = keepalive
            nicehash = pool.get("nicehash")
            if isinstance(nicehash, bool):
                parsed["nicehash"] = nicehash
            if parsed.get("url"):
                parsed_pools.append(parsed)
        data["pools"] = parsed_pools
    return data


__all__ = ["CONFIG_FILE", "AppConfig", "PoolConfig", "build_pools", "load_config"]
