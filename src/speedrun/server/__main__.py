"""Spanish Speedrun JSON-lines server entry point.

Usage: python -m speedrun.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from .handler import ServerHandler
from .protocol import Notification, Request, Response

logger = logging.getLogger("speedrun.server")


async def main() -> None:
    loop = asyncio.get_event_loop()

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(write_notification=write_notification)
    logger.info("ready")

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        try:
            req = Request.from_json_line(line_str)
        except ValueError as e:
            write_line(Response(id=0, error=str(e)).to_json_line())
            continue

        try:
            result = await handler.dispatch(req.to_dict())
            resp = Response(id=req.id, result=result)
        except Exception as e:
            logger.exception("error handling %s", req.method)
            resp = Response(id=req.id, error=str(e))

        write_line(resp.to_json_line())


def run() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("SPEEDRUN_LOG_LEVEL", "INFO").upper(),
        format="speedrun-server: %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
