"""Tests for config loading and pool construction."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from stratumpool import config as config_module
from stratumpool.algorithms import AlgorithmId
from stratumpool.config import AppConfig, PoolConfig, build_pools, load_config
from stratumpool.variants import VariantId


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")

    result = load_config()

    assert result == AppConfig()
    assert result.pools == []


def test_load_config_reads_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
algo = "cryptonight-lite"
variant = 1

[algorithms]
cryptonight-ipbc = false

[[pools]]
url = "stratum+tcp://pool.example.com:3333"
userpass = "wallet:x"
keepalive = true

[[pools]]
url = "backup.example.com"
user = "wallet"
algo = "cn-heavy"
keepalive = 30
nicehash = false

[[pools]]
userpass = "no-url:here"
"""
    )
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    result = load_config()

    assert result.algo == "cryptonight-lite"
    assert result.variant == 1
    assert result.algorithms == {"cryptonight-ipbc": False}
    assert [pool.url for pool in result.pools] == ["stratum+tcp://pool.example.com:3333", "backup.example.com"]
    assert result.pools[0].keepalive is True
    assert result.pools[1].keepalive == 30
    assert result.pools[1].nicehash is False


def test_load_config_accepts_explicit_path(tmp_path: Path) -> None:
    config_path = tmp_path / "pools.toml"
    config_path.write_text('algo = "cn"\n')

    assert load_config(config_path).algo == "cn"


def test_load_config_handles_toml_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("algo = [unterminated")
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    result = load_config()

    assert result == AppConfig()


def test_algorithm_table_follows_flags() -> None:
    config = AppConfig(algorithms={"sumo": False})

    table = config.algorithm_table()

    assert not table.is_enabled(AlgorithmId.CRYPTONIGHT_HEAVY)
    assert table.is_enabled(AlgorithmId.CRYPTONIGHT_LITE)


def test_build_pools_applies_entries_and_defaults() -> None:
    config = AppConfig(
        algo="cn-lite",
        variant=0,
        pools=[
            PoolConfig(url="stratum+tcp://pool.example.com:5555", userpass="wallet:x", keepalive=True),
            PoolConfig(url="cryptonight.eu.nicehash.com:3355", user="btc", password="w1", algo="cn-heavy"),
        ],
    )

    first, second = build_pools(config)

    assert first.user == "wallet"
    assert first.algorithm is AlgorithmId.CRYPTONIGHT_LITE
    assert first.configured_variant is VariantId.V0
    assert first.keep_alive == 60
    assert second.algorithm is AlgorithmId.CRYPTONIGHT_HEAVY
    assert (second.user, second.password) == ("btc", "w1")
    assert second.nicehash is True
    assert second.keep_alive == 0


def test_build_pools_skips_rejected_entries(caplog: pytest.LogCaptureFixture) -> None:
    config = AppConfig(
        pools=[
            PoolConfig(url="http://pool.example.com"),
            PoolConfig(url="pool.example.com", userpass="missing-separator"),
            PoolConfig(url="pool.example.com", variant=5),
            PoolConfig(url="good.example.com"),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="stratumpool.config"):
        pools = build_pools(config)

    assert [pool.host for pool in pools] == ["good.example.com"]
    assert pools[0].algorithm is AlgorithmId.CRYPTONIGHT
    assert len(caplog.records) == 3


def test_with_pools_replaces_pool_list() -> None:
    config = AppConfig(pools=[PoolConfig(url="a.example.com")])

    updated = config.with_pools([PoolConfig(url="b.example.com")])

    assert [pool.url for pool in updated.pools] == ["b.example.com"]
    assert [pool.url for pool in config.pools] == ["a.example.com"]


def test_build_pools_survives_very_long_port() -> None:
    config = AppConfig(pools=[PoolConfig(url="pool.example.com:" + "9" * 5000)])

    pools = build_pools(config)

    assert [(pool.host, pool.port) for pool in pools] == [("pool.example.com", 0xFFFF)]
