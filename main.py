"""Main entry point for the Xiangqi AI server."""

import argparse
import logging
import os
import uvicorn

from cnchess.constants import MIN_SEARCH_DEPTH, MAX_SEARCH_DEPTH

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Xiangqi AI Server")
    parser.add_argument(
        "--depth",
        "-d",
        type=int,
        choices=range(MIN_SEARCH_DEPTH, MAX_SEARCH_DEPTH + 1),
        default=None,
        help="Default AI search depth for new games",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Pass depth to the app (also under --reload) through the environment
    if args.depth is not None:
        os.environ["CNCHESS_SEARCH_DEPTH"] = str(args.depth)
        logging.getLogger("cnchess").info("Using search depth: %d", args.depth)

    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )
