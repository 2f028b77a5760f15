#!/usr/bin/env python3
"""
lambda_logs - Main Entry Point
Run the Lambda CloudWatch Logs terminal UI
"""
import sys
import traceback

from lambda_logs.aws import AwsCliBackend
from lambda_logs.config import AppSettings, load_profiles, setup_logging
from lambda_logs.core import NavigationController
from lambda_logs.errors import ConfigurationError
from lambda_logs.UI import run_app


def main() -> None:
    try:
        settings = AppSettings.from_env()
        logger = setup_logging(settings)
        profiles = load_profiles(settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info(f"Starting with {len(profiles)} profiles")
    backend = AwsCliBackend(aws_cli=settings.aws_cli, timeout=settings.timeout)
    controller = NavigationController(profiles, backend)

    try:
        run_app(controller)
    except KeyboardInterrupt:
        print("\nlambda_logs terminated by user")
    except Exception as e:
        logger.exception("Fatal error in the terminal UI")
        print(f"\nError running lambda_logs: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
