"""Command line entry point that loads and reports configured pools."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from .config import AppConfig, PoolConfig, build_pools, load_config

LOG = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="stratumpool", description="Validate and normalize pool endpoints.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    parser.add_argument(
        "-o",
        "--url",
        action="append",
        default=[],
        help="Pool url; may be repeated and replaces the pools from the config file",
    )
    parser.add_argument(
        "-O",
        "--userpass",
        default=None,
        help="user:password for every pool, from --url or the config file",
    )
    parser.add_argument("-a", "--algo", default=None, help="Default algorithm")
    parser.add_argument("--log-level", default="info", choices=("debug", "info", "warning", "error"))
    return parser.parse_args(argv)


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.algo:
        config = config.model_copy(update={"algo": args.algo})
    if args.url:
        config = config.with_pools([PoolConfig(url=url, userpass=args.userpass) for url in args.url])
    elif args.userpass is not None:
        config = config.with_pools(
            [
                pool.model_copy(update={"userpass": args.userpass, "user": None, "password": None})
                for pool in config.pools
            ]
        )
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Load pools, log each normalized descriptor and return an exit status."""

    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = _apply_overrides(load_config(args.config), args)
    table = config.algorithm_table()
    pools = build_pools(config, table)
    if not pools:
        LOG.error("No valid pool configured")
        return 1
    for pool in pools:
        pool.log_summary(LOG, table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
