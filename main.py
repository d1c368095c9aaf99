# main.py

"""Entry point for the tradecore command-line runner."""

import argparse
import logging
import sys

from tradecore.config.logging_config import setup_logging

logger = logging.getLogger("tradecore.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tradecore",
        description="Peer-to-peer marketplace transaction core.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser(
        "demo",
        help="Run a completed and a cancelled sale on a fresh store.",
    )
    demo.add_argument(
        "--snapshot",
        default=None,
        dest="snapshot_path",
        help="Save the resulting store to this JSON file.",
    )

    show = sub.add_parser(
        "show", help="Print the contents of a saved snapshot.",
    )
    show.add_argument(
        "--load",
        required=True,
        dest="snapshot_path",
        help="Snapshot JSON file to load.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Dispatch to the requested sub-command."""
    log_file = setup_logging()
    logger.info("tradecore starting, log file: %s", log_file)

    args = _build_parser().parse_args(argv)

    from tradecore.cli.runner import cli_demo, cli_show

    try:
        if args.command == "demo":
            return cli_demo(args.snapshot_path)
        return cli_show(args.snapshot_path)
    except Exception:
        logger.critical("Fatal error during %s run", args.command, exc_info=True)
        raise
    finally:
        logger.info("tradecore shutting down")


if __name__ == "__main__":
    sys.exit(main())
