"""Command line entry point."""
import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from vulnera_adapter.config import Settings, default_install_root
from vulnera_adapter.errors import AdapterError, log_error
from vulnera_adapter.launcher import resolve_command
from vulnera_adapter.logging import configure_logging, get_logger
from vulnera_adapter.types import ResolutionResult

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vulnera-adapter",
        description="Install, update and launch the vulnera-adapter language server",
    )
    parser.add_argument(
        "--install-root",
        type=Path,
        default=None,
        help=f"Directory for the adapter binary and its state (default: {default_install_root()})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="stderr log level",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("resolve", help="Print the resolved command and environment as JSON")
    sub.add_parser("run", help="Resolve, then run the adapter over this process's stdio")
    return parser


def render_result(result: ResolutionResult) -> str:
    return json.dumps({
        "command": str(result.command),
        "args": result.args,
        "env": [[key, value] for key, value in result.env],
    })


async def run_adapter(result: ResolutionResult) -> int:
    """Run the adapter with inherited stdio and wait for it to exit."""
    env = {**os.environ, **result.env_dict()}

    logger.info("adapter_starting", command=str(result.command))
    process = await asyncio.create_subprocess_exec(str(result.command), *result.args, env=env)
    returncode = await process.wait()
    logger.info("adapter_exited", returncode=returncode)
    return returncode


async def _main(args: argparse.Namespace) -> int:
    settings = Settings(install_root=args.install_root) if args.install_root else Settings()
    result = await resolve_command(dict(os.environ), settings=settings)

    if args.command == "resolve":
        print(render_result(result))
        return 0
    return await run_adapter(result)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        return asyncio.run(_main(args))
    except AdapterError as e:
        log_error(e, logger=logger)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
