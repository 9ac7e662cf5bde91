"""
Start the Civic Queue API under uvicorn.

Host, port and reload default to API_HOST, API_PORT and RELOAD from the
environment (or .env); flags override them for one run.

Usage:
    python run.py
    python run.py --reload
    python run.py --host 0.0.0.0 --port 8080
"""
import argparse
import sys
from typing import List, Optional

import uvicorn

from civic_queue.config.settings import settings

APP_PATH = "civic_queue.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the complaint routing and queue API")
    parser.add_argument("--host", default=settings.api_host, help=f"Bind address (default: {settings.api_host})")
    parser.add_argument("--port", type=int, default=settings.api_port, help=f"Bind port (default: {settings.api_port})")
    parser.add_argument(
        "--reload",
        action="store_true",
        default=settings.reload,
        help="Restart on code changes (development only)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    print(f"Civic Queue API on http://{args.host}:{args.port} ({settings.environment}, mongo db {settings.mongo_db})")

    uvicorn.run(APP_PATH, host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
