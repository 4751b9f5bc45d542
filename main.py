"""
News Relay Application

This is the main entry point for the News Relay. It starts an HTTP server
that looks up news by keyword, drafts LinkedIn posts about it with a
language model, and proxies the LinkedIn OAuth flow and publish call.

For production, run under gunicorn with gunicorn.conf.py instead.
"""

import argparse
import logging
import sys

from api.app import create_app
from config.settings import load_settings, get_config_summary
from config.validators import validate_settings
from utils.exceptions import ConfigurationError
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='News Relay Server')
    parser.add_argument('--host', type=str, default='0.0.0.0', help='Interface to bind')
    parser.add_argument('--port', type=int, default=None, help='Port to listen on (overrides PORT)')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    parser.add_argument('--debug', action='store_true', help='Run the Flask debug server')
    parser.add_argument('--strict', action='store_true',
                        help='Exit instead of warning when configuration validation fails')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Set up logging
    setup_file_logging(args.log_file, getattr(logging, args.log_level))

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        if args.strict:
            logger.error(str(e))
            return 2
        logger.warning(f"{e}\nAffected routes will report the missing configuration per request.")

    logger.info(f"Configuration: {get_config_summary(settings)}")

    port = args.port or settings.port
    app = create_app(settings)

    logger.info(f"🚀 Server running on http://localhost:{port}")
    logger.info(f"📊 Health check: http://localhost:{port}/health")
    app.run(host=args.host, port=port, debug=args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
