from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import uvicorn
from dotenv import load_dotenv

from appreviews.app import build_services, sync_reviews
from appreviews.config import ConfigurationError, configure_logging, get_server_config
from appreviews.domain.errors import DomainValidationError
from appreviews.ui.api import ReviewResponse, create_api

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track and serve recent App Store reviews")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Root log level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API and the reconciliation scheduler")
    serve.add_argument("--host", type=str, help="Interface to bind (defaults to config)")
    serve.add_argument("--port", type=int, help="Port to bind (defaults to config)")
    serve.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Serve reads and registrations without periodic reconciliation",
    )

    subparsers.add_parser("sync", help="Run one reconciliation sweep and exit")

    add_app = subparsers.add_parser("add-app", help="Register an app and pull its reviews")
    add_app.add_argument("app_id", type=str, help="App Store numeric app id")

    recent = subparsers.add_parser("recent", help="Print the recent reviews stored for an app")
    recent.add_argument("app_id", type=str, help="App Store numeric app id")

    return parser.parse_args(list(argv))


def _serve(args: argparse.Namespace) -> None:
    server_config = get_server_config()
    services = build_services()
    api = create_api(
        services,
        run_scheduler=not args.no_scheduler,
        cors_origins=server_config.cors_origins,
    )
    uvicorn.run(
        api,
        host=args.host or server_config.host,
        port=args.port or server_config.port,
        log_config=None,
    )


def _print_recent(app_id: str) -> None:
    reviews = build_services().recent_reviews(app_id)
    payload = {
        "reviews": [
            ReviewResponse.from_domain(review).model_dump(mode="json", by_alias=True)
            for review in reviews
        ]
    }
    print(json.dumps(payload, indent=2))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=getattr(logging, parsed_args.log_level))

    try:
        if parsed_args.command == "serve":
            _serve(parsed_args)
        elif parsed_args.command == "sync":
            result = sync_reviews()
            if result.failures:
                log.warning("Reconciliation finished with failures: %s", result.failures)
        elif parsed_args.command == "add-app":
            app = build_services().register_app(parsed_args.app_id)
            log.info("Tracking app %s", app.id)
        elif parsed_args.command == "recent":
            _print_recent(parsed_args.app_id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except (DomainValidationError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
