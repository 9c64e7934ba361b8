#!/usr/bin/env python
"""
Command line JSON-RPC client

Usage:
    seam-rpc tcp://127.0.0.1:7000 add 1 2
    seam-rpc http://localhost:8080/rpc get_status --timeout-ms 2000
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from seam_rpc.client import Client
from seam_rpc.config import ClientConfig
from seam_rpc.telemetry.metrics import setup_metrics
from seam_rpc.telemetry.tracer import setup_tracer

logger = logging.getLogger(__name__)


def parse_param(value: str) -> Any:
    """Parse a command line parameter as JSON, falling back to the raw string"""
    try:
        return json.loads(value)
    except ValueError:
        return value


def build_params(values: List[str]) -> Any:
    params = [parse_param(v) for v in values]
    if len(params) == 1:
        return params[0]
    return params


def build_parser(config: ClientConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seam-rpc", description="Call a JSON-RPC 2.0 method over HTTP or TCP")
    parser.add_argument("address", help="Target address, e.g. tcp://host:port or http://host/path")
    parser.add_argument("method", help="Method name")
    parser.add_argument("params", nargs="*", help="Parameters, each parsed as JSON when possible")
    parser.add_argument("--timeout-ms", type=int, default=config.timeout_ms, help="Request timeout in milliseconds")
    parser.add_argument("--notify", action="store_true", help="Send as a notification (no id)")
    parser.add_argument("--id", dest="call_id", default=None, help="Label for debug log correlation")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    parser.add_argument("--otlp-endpoint", default=None, help="Export traces and metrics to this OTLP endpoint")
    return parser


async def run(args: argparse.Namespace) -> Any:
    client = Client(args.address, timeout_ms=args.timeout_ms, log_hook=_log_record)
    return await client.call(
        args.method,
        build_params(args.params),
        timeout_ms=args.timeout_ms,
        is_async=args.notify,
        call_id=args.call_id,
    )


def _log_record(record):
    logger.info(f"{record['method']} on {record['addr']} took {record['duration']:.2f}ms")


def main(argv: Optional[List[str]] = None) -> int:
    config = ClientConfig.from_env()
    args = build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    otlp_endpoint = args.otlp_endpoint or (config.otlp_endpoint if config.enable_tracing else None)
    if otlp_endpoint:
        setup_tracer(config.service_name, otlp_endpoint)
        setup_metrics(config.service_name, otlp_endpoint)

    try:
        result = asyncio.run(run(args))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
