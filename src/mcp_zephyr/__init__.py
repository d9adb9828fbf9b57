import argparse
import asyncio
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .utils.env import get_env_int
from .utils.logging import setup_logging

try:
    __version__ = version("mcp-zephyr")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"

logger = logging.getLogger("mcp-zephyr")

TRANSPORTS = ("stdio", "sse", "streamable-http")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-zephyr",
        description="MCP server exposing Zephyr Scale test management tools",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument("--env-file", help="Path to a .env file to load")
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=None,
        help="Transport type (default: TRANSPORT env var or stdio)",
    )
    parser.add_argument(
        "--host", default=None, help="Host for SSE or streamable-http (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for SSE or streamable-http (default: 8000)",
    )
    parser.add_argument("--path", default=None, help="Endpoint path for HTTP transports")
    parser.add_argument("--zephyr-url", help="Zephyr base URL (ZEPHYR_BASE_URL)")
    parser.add_argument("--zephyr-api-key", help="Zephyr API token (ZEPHYR_API_KEY)")
    parser.add_argument(
        "--deployment-type",
        choices=("cloud", "datacenter"),
        help="Override the detected deployment type (ZEPHYR_DEPLOYMENT_TYPE)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Disable all write operations (READ_ONLY_MODE)",
    )
    parser.add_argument(
        "--enabled-tools",
        help="Comma-separated list of tools to enable (ENABLED_TOOLS)",
    )
    parser.add_argument(
        "--ssl-verify",
        dest="ssl_verify",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Verify SSL certificates (ZEPHYR_SSL_VERIFY)",
    )
    return parser


def _logging_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    if os.getenv("MCP_VERY_VERBOSE", "").lower() in ("true", "1", "yes"):
        return logging.DEBUG
    if os.getenv("MCP_VERBOSE", "").lower() in ("true", "1", "yes"):
        return logging.INFO
    return logging.WARNING


def _export_options(args: argparse.Namespace) -> None:
    """Copy command line values into the environment read by the server."""
    overrides = {
        "ZEPHYR_BASE_URL": args.zephyr_url,
        "ZEPHYR_API_KEY": args.zephyr_api_key,
        "ZEPHYR_DEPLOYMENT_TYPE": args.deployment_type,
        "ENABLED_TOOLS": args.enabled_tools,
    }
    if args.read_only:
        overrides["READ_ONLY_MODE"] = "true"
    if args.ssl_verify is not None:
        overrides["ZEPHYR_SSL_VERIFY"] = str(args.ssl_verify).lower()
    for name, value in overrides.items():
        if value:
            os.environ[name] = value


def main(argv: list[str] | None = None) -> None:
    """Zephyr Scale MCP Server.

    Options given on the command line override the matching environment
    variables. The backend configuration is validated before any transport is
    started; an incomplete configuration exits with status 1.
    """
    args = _build_parser().parse_args(argv)

    if args.env_file:
        logger.debug(f"Loading environment from file: {args.env_file}")
        load_dotenv(args.env_file, override=True)
    else:
        load_dotenv()

    setup_logging(_logging_level(args.verbose))
    _export_options(args)

    from .servers.main import main_mcp
    from .zephyr import ZephyrConfig, build_profile

    try:
        build_profile(ZephyrConfig.from_env())
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    transport = args.transport or os.getenv("TRANSPORT", "stdio").lower()
    if transport not in TRANSPORTS:
        logger.error(f"Unknown transport {transport!r}; expected one of {TRANSPORTS}")
        sys.exit(1)

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = args.host or os.getenv("HOST", "0.0.0.0")
        run_kwargs["port"] = args.port or get_env_int("PORT", 8000)
        if args.path:
            run_kwargs["path"] = args.path

    logger.info(f"Starting Zephyr MCP server with {transport} transport")
    try:
        asyncio.run(main_mcp.run_async(**run_kwargs))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


__all__ = ["__version__", "main"]

if __name__ == "__main__":
    main()
