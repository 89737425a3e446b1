"""Long-running relay server (uvicorn)."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from gemini_relay.common.config import ServerSettings, Settings
from gemini_relay.common.logging_setup import setup_logging
from gemini_relay.relay.fastapi_app import create_app

LOGGER = logging.getLogger("gemini_relay.server")

def require_api_key(settings: Settings) -> None:
    """Abort startup when no upstream credential is configured."""
    if settings.has_api_key:
        return
    LOGGER.error("GEMINI_API_KEY not found in the environment or .env file.")
    LOGGER.error("Create a .env file next to where you start the server and add: GEMINI_API_KEY=<your key>")
    raise SystemExit(1)

def main(argv: list[str] | None = None) -> None:
    settings = ServerSettings()
    setup_logging(settings.log_level)

    ap = argparse.ArgumentParser(description="Run the Gemini relay server")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    args = ap.parse_args(argv)

    require_api_key(settings)

    app = create_app(settings)
    base = f"http://localhost:{args.port}"
    LOGGER.info("Backend server listening at %s", base)
    LOGGER.info("API endpoint for chat: %s/generate", base)
    LOGGER.info("Optional model list:   %s/models", base)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)

if __name__ == "__main__":
    main()
