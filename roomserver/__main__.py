import argparse
import asyncio
import logging
import os
import random

from cardroom.registry import RoomRegistry
from .server import RoomServer


def default_port() -> int:
    try:
        return int(os.environ.get("PORT", "3001"))
    except ValueError:
        return 3001


def main() -> None:
    parser = argparse.ArgumentParser(description="Multiplayer card room server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=default_port(), help="Listening port (defaults to $PORT or 3001)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed room ids and shuffles for reproducible sessions",
    )
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level))

    rng = random.Random(args.seed) if args.seed is not None else None
    server = RoomServer(RoomRegistry(rng=rng))
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
