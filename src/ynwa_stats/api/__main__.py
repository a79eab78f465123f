"""Run the API with uvicorn: ``python -m ynwa_stats.api``."""

from __future__ import annotations

import argparse

import uvicorn

from ynwa_stats.api import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the ynwa-stats API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()
    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
