import argparse
import dataclasses
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import urllib3
import yaml

from lux_jsonrpc import ClientConfig, HealthClient, HttpDispatcher, InfoClient, PlatformClient, RPCError

DEFAULT_ENDPOINT = "http://127.0.0.1:9650"


def new_logger(level: str = "INFO") -> logging.Logger:
    log = logging.getLogger("lux_jsonrpc")
    log.setLevel(level.upper())
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", "%Y-%m-%dT%H:%M:%SZ")
    fmt.converter = time.gmtime  # UTC
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    log.handlers = [handler]
    return log


def load_config(config_path: Optional[Path]) -> dict:
    if config_path is None:
        return {}
    with config_path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def build_client_config(config: dict, args: argparse.Namespace) -> ClientConfig:
    defaults = ClientConfig()
    return ClientConfig(
        user_agent=config.get("user_agent", defaults.user_agent),
        timeout=float(args.timeout if args.timeout is not None else config.get("timeout", defaults.timeout)),
        verify_tls=bool(config.get("verify_tls", defaults.verify_tls)),
    )


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return _jsonable(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return value


def _commands(info: InfoClient, platform: PlatformClient, health: HealthClient, args: argparse.Namespace) -> Dict[str, Callable[[], Any]]:
    return {
        "network-name": info.get_network_name,
        "network-id": info.get_network_id,
        "blockchain-id": lambda: info.get_blockchain_id(args.target),
        "node-id": info.get_node_id,
        "node-version": info.get_node_version,
        "vms": info.get_vms,
        "bootstrapped": info.is_bootstrapped,
        "tx-fee": info.get_tx_fee,
        "peers": info.peers,
        "issue-tx": lambda: platform.issue_tx(args.target),
        "tx": lambda: platform.get_tx(args.target),
        "tx-status": lambda: platform.get_tx_status(args.target),
        "height": platform.get_height,
        "balance": lambda: platform.get_balance(args.target),
        "utxos": lambda: platform.get_utxos(args.target),
        "validators": lambda: (
            platform.get_subnet_validators(args.subnet) if args.subnet else platform.get_primary_network_validators()
        ),
        "subnets": platform.get_subnets,
        "blockchains": platform.get_blockchains,
        "blockchain-status": lambda: platform.get_blockchain_status(args.target),
        "health": lambda: health.check(liveness=args.liveness),
    }


TARGET_COMMANDS = ("blockchain-id", "issue-tx", "tx", "tx-status", "balance", "utxos", "blockchain-status")
COMMANDS = (
    "network-name",
    "network-id",
    "node-id",
    "node-version",
    "vms",
    "bootstrapped",
    "tx-fee",
    "peers",
    "height",
    "validators",
    "subnets",
    "blockchains",
    "health",
) + TARGET_COMMANDS


def run(args: argparse.Namespace, config: dict) -> Any:
    endpoint = args.endpoint or config.get("endpoint", DEFAULT_ENDPOINT)
    client_config = build_client_config(config, args)
    if not client_config.verify_tls:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    dispatcher = HttpDispatcher(client_config)
    try:
        info = InfoClient(endpoint, dispatcher=dispatcher)
        platform = PlatformClient(endpoint, dispatcher=dispatcher)
        health = HealthClient(endpoint, dispatcher=dispatcher)
        return _commands(info, platform, health, args)[args.command]()
    finally:
        dispatcher.close()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Lux node JSON-RPC client")
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML config file")
    parser.add_argument("--endpoint", default=None, help=f"Node endpoint (default {DEFAULT_ENDPOINT})")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--subnet", default=None, help="Subnet id for the validators command")
    parser.add_argument("--liveness", action="store_true", help="Check /ext/health/liveness instead of /ext/health")
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("target", nargs="?", default=None, help="Alias, address, tx or blockchain id")
    args = parser.parse_args(argv)
    if args.command in TARGET_COMMANDS and not args.target:
        parser.error(f"{args.command} requires a target argument")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)
    new_logger(args.log_level or config.get("log_level", "INFO"))

    try:
        result = run(args, config)
    except RPCError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(_jsonable(result), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
