"""
Run the contacts API with uvicorn.
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from contacts_api.app import configure_logging
from contacts_api.config import get_settings


def main() -> int:
    parser = argparse.ArgumentParser(description="Contacts API server")
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Interface to bind",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8080")),
        help="Port to listen on (defaults to $PORT or 8080)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on source changes (development only)",
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "contacts_api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
