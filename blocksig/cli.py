# ------------------------------------------------------------
# Module: blocksig/cli.py
# Purpose: Command line entry point: hash a file, or serve the upload endpoint.
# ------------------------------------------------------------

"""blocksig command line.

File mode:   blocksig -i INPUT -o OUTPUT [-b MIB]
Server mode: blocksig -s PORT

The two modes are mutually exclusive. Exit status is 0 on success and 1 on
any failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from blocksig.core.config import Settings, settings_from_env
from blocksig.core.logging import configure_logging, mode_prefix
from blocksig.engine import ConfigurationError, ModeConflictError, SignatureError
from blocksig.services.signature import block_size_bytes, sign_file

log = logging.getLogger("blocksig.cli")


def build_parser(cfg: Settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="blocksig",
        description="Compute fixed-size block SHA-256 signatures of files.",
    )
    ap.add_argument("-i", dest="input", default="", help="file for signature generation")
    ap.add_argument("-o", dest="output", default="", help="file for signature output")
    ap.add_argument(
        "-s", dest="port", type=int, default=0, help="start server on the port"
    )
    ap.add_argument(
        "-b",
        dest="block_size_mb",
        type=int,
        default=cfg.DEFAULT_BLOCK_SIZE_MB,
        help=f"size of block in MB (1..{cfg.MAX_BLOCK_SIZE_MB})",
    )
    ap.add_argument("-l", dest="log_file", default="", help="file for log")
    ap.add_argument(
        "-w",
        dest="workers",
        type=int,
        default=None,
        help=f"concurrent hashing workers (default {cfg.TARGET_WORKERS})",
    )
    return ap


def validate_args(args: argparse.Namespace, cfg: Settings) -> None:
    """Reject inconsistent arguments before any work starts.

    Raises:
        ConfigurationError: Missing/conflicting modes or an unsupported block size.
    """
    is_server = args.port != 0
    is_file = bool(args.input or args.output)
    if is_server and is_file:
        raise ModeConflictError("'-s' and '-i/-o' are mutually exclusive")
    if not is_server and not is_file:
        raise ConfigurationError("either '-s' or '-i/-o' is required")
    if is_server and not 1 <= args.port <= 65535:
        raise ConfigurationError(f"invalid port {args.port}")
    if is_file:
        if not args.input:
            raise ConfigurationError("'-i' input file argument is missing")
        if not args.output:
            raise ConfigurationError("'-o' output file argument is missing")
        block_size_bytes(args.block_size_mb, cfg)


def run_file(args: argparse.Namespace, cfg: Settings) -> bool:
    try:
        sign_file(args.input, args.output, args.block_size_mb, cfg)
    except (OSError, SignatureError) as e:
        log.error("unable to hash input file %s: %s", args.input, e)
        return False
    return True


def run_server(args: argparse.Namespace, cfg: Settings) -> bool:
    import uvicorn

    from blocksig.main import create_app

    log.info("serving on %s:%d", cfg.HOST, args.port)
    # uvicorn handles SIGINT/SIGTERM and drains in-flight requests.
    uvicorn.run(
        create_app(cfg),
        host=cfg.HOST,
        port=args.port,
        log_config=None,
        access_log=cfg.ACCESS_LOG,
        timeout_graceful_shutdown=cfg.SHUTDOWN_GRACE_S,
    )
    log.info("stopped")
    return True


def main(argv: Sequence[str] | None = None) -> int:
    # ConfigurationError and pydantic's ValidationError are both ValueErrors.
    try:
        base = settings_from_env()
    except ValueError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 1
    args = build_parser(base).parse_args(argv)
    try:
        cfg = settings_from_env(TARGET_WORKERS=args.workers)
        validate_args(args, cfg)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    is_server = args.port != 0
    configure_logging(mode_prefix(not is_server, is_server), args.log_file or None, cfg)
    log.info("**********blocksig starting**********")
    ok = run_server(args, cfg) if is_server else run_file(args, cfg)
    log.info("**********blocksig done**********")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
