from __future__ import annotations

from typing import Any
import argparse
import json
import logging
import time

from resource_monitor.commands import CommandRouter
from resource_monitor.config import AppConfig, default_config, load_config
from resource_monitor.formatting import summarize
from resource_monitor.logging_utils import configure_logging, resolve_log_level
from resource_monitor.schema import validate_payload

logger = logging.getLogger("resource_monitor")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Desktop hardware resource monitor")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CFG configuration file (defaults are used when omitted)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable debug logging (-v) or trace logging (-vv)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the static snapshot and a single dynamic sample, then exit",
    )
    parser.add_argument(
        "--static",
        action="store_true",
        help="Print only the static snapshot and exit",
    )
    parser.add_argument(
        "--dump-json",
        help="Write the latest dynamic payload to a file (overwrites on each loop)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a human-readable line per sample instead of JSON",
    )
    startup = parser.add_mutually_exclusive_group()
    startup.add_argument(
        "--enable-startup",
        action="store_true",
        help="Register the logon task that starts the monitor, then exit",
    )
    startup.add_argument(
        "--disable-startup",
        action="store_true",
        help="Remove the logon task, then exit",
    )
    startup.add_argument(
        "--startup-status",
        action="store_true",
        help="Print whether the logon task is registered, then exit",
    )
    return parser


def _check_schema(payload: dict[str, Any], kind: str) -> None:
    schema_errors = validate_payload(payload, kind)
    if schema_errors:
        logger.warning("Schema validation failed with %s errors.", len(schema_errors))
        logger.debug("Schema errors: %s", schema_errors)


def _emit(payload: dict[str, Any], pretty: bool) -> str:
    payload_json = json.dumps(payload, indent=2) if pretty else json.dumps(payload)
    print(payload_json, flush=True)
    return payload_json


def _load(path: str | None) -> AppConfig:
    if path is None:
        return default_config()
    return load_config(path)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = resolve_log_level(args.verbose, args.log_level)
    configure_logging(level)
    config = _load(args.config)
    pretty_print = level <= logging.DEBUG
    router = CommandRouter(config)

    if args.enable_startup or args.disable_startup:
        state = router.invoke("toggle_startup", enable=args.enable_startup)
        print(json.dumps({"startup": state}))
        return 0
    if args.startup_status:
        print(json.dumps({"startup": router.invoke("get_startup_setting")}))
        return 0

    snapshot = router.sampler.get_static_data()
    static_payload = snapshot.to_payload()
    _check_schema(static_payload, "static")
    if not args.summary:
        _emit(static_payload, pretty_print)
    if args.static:
        return 0

    interval = max(0.5, config.poll.interval_s)
    if not args.once:
        logger.info("Resource monitor started. Sampling every %s seconds.", interval)

    try:
        while True:
            sample = router.sampler.get_dynamic_data()
            payload = sample.to_payload()
            _check_schema(payload, "dynamic")
            if args.summary:
                print(summarize(snapshot, sample), flush=True)
                payload_json = json.dumps(payload)
            else:
                payload_json = _emit(payload, pretty_print)
            if args.dump_json:
                with open(args.dump_json, "w", encoding="utf-8") as handle:
                    handle.write(payload_json)
            if args.once:
                return 0
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Resource monitor stopped.")
    return 0
