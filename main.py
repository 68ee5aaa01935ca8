"""
Jobly - API server entry point.

Usage: python main.py [--host HOST] [--port PORT] [--reload]
"""

import argparse

from dotenv import load_dotenv

load_dotenv()

import uvicorn  # noqa: E402


def main():
    """Serve the Jobly API."""
    parser = argparse.ArgumentParser(description="Run the Jobly API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run("jobly.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
