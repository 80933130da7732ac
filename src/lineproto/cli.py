"""Command-line interface for the lineproto server."""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from .config import PROTOCOLS, Config, load_config
from .server import ProtocolServer
from .transport import TcpTransport


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="lineproto - FTP/SMTP style control channel server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # FTP login server on 127.0.0.1:2121
  %(prog)s -c config.yaml           # Use specific config file
  %(prog)s -p smtp                  # SMTP server on 127.0.0.1:2525
  %(prog)s -p smtp --port 2626      # SMTP server on another port
  %(prog)s --host 0.0.0.0 -v        # Listen on all interfaces, verbose

FTP logins need accounts or allow_anonymous in a config file
(see config.example.yaml); without one every login is refused.
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-p", "--protocol",
        choices=PROTOCOLS,
        help="Protocol variant to serve",
    )

    parser.add_argument(
        "--host",
        metavar="ADDRESS",
        help="Address to listen on",
    )

    parser.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        help="Port to listen on",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """
    Build the configuration from the config file and command line.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the configuration is invalid.
    """
    config = load_config(args.config) if args.config else Config()

    # Override config with command line arguments
    if args.protocol:
        config = replace(config, protocol=args.protocol)
    if args.host:
        config = replace(config, host=args.host)
    if args.port is not None:
        config = replace(config, port=args.port)

    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        config = build_config(args)
    except FileNotFoundError:
        logger.error(f"Config file not found: {args.config}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    server = ProtocolServer(config)
    transport = TcpTransport(
        server,
        host=config.host,
        port=config.get_port(),
        idle_timeout=config.idle_timeout_seconds or None,
    )

    logger.info(f"Starting {config.protocol} server...")
    logger.info(f"  Address: {config.host}:{config.get_port()}")
    logger.info(f"  Idle timeout: {config.idle_timeout_seconds}s")
    if config.protocol == "ftp" and not (config.accounts or config.allow_anonymous):
        logger.warning("No accounts configured and anonymous login disabled; every login will be refused")

    try:
        asyncio.run(transport.serve_forever())
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")
    except OSError as e:
        logger.error(f"Server error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
