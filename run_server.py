"""Fleet monitor API server entry point.

Usage:
    # Development:
    python run_server.py

    # Custom host/port, JSON logs:
    python run_server.py --host 0.0.0.0 --port 9000 --log-format json
"""
from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Fleet Monitor API Server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=9002, help="Port (default: 9002)")
    parser.add_argument("--backend-api-url", default=None, help="Live fleet API base URL (overrides BACKEND_API_URL)")
    parser.add_argument("--timezone", default=None, help="IANA zone for day/week/month boundaries")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-format", default="structured", choices=["structured", "json"])
    args = parser.parse_args()

    import uvicorn

    from fleet_monitor.api.config import ApiSettings
    from fleet_monitor.api.main import create_app

    overrides = {"host": args.host, "port": args.port, "log_level": args.log_level, "log_format": args.log_format}
    if args.backend_api_url:
        overrides["backend_api_url"] = args.backend_api_url
    if args.timezone:
        overrides["report_timezone"] = args.timezone
    settings = ApiSettings(**overrides)

    app = create_app(settings)

    logger.info("Starting Fleet Monitor API on %s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
