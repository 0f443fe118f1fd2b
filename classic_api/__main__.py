"""Run the API with uvicorn: python -m classic_api [--host H] [--port P]."""
from __future__ import annotations

import argparse
import os

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Classic search API server")
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8080")))
    args = parser.parse_args()
    uvicorn.run("classic_api.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
