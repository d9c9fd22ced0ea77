"""
Run the guidance backend as a long-running process (DEPLOYMENT_MODE=server).

Bind address and log level come from the environment or the project .env:
BACKEND_HOST, BACKEND_PORT, LOG_LEVEL.

Run:
  python backend/start_server.py
"""
import asyncio
import os
import sys
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv, find_dotenv
import uvicorn

backend_dir = Path(__file__).parent.absolute()
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def resolve_bind() -> Tuple[str, int, str]:
    """Host, port and uvicorn log level, with .env values filling in what the shell did not export."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    host = os.getenv("BACKEND_HOST", "127.0.0.1")
    port = int(os.getenv("BACKEND_PORT", "8000"))
    log_level = os.getenv("LOG_LEVEL", "INFO").lower()
    return host, port, log_level


def main() -> None:
    # psycopg3 async does not run on the Proactor loop
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    host, port, log_level = resolve_bind()
    uvicorn.run("guidance.main:app", host=host, port=port, reload=False, log_level=log_level)


if __name__ == "__main__":
    main()
