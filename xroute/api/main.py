"""FastAPI application for the route optimizer."""

import logging
import os

import uvicorn
from fastapi import FastAPI

from xroute import __version__
from xroute.api.endpoints import router
from xroute.logging_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("XROUTE_HOST", "0.0.0.0")
PORT = int(os.environ.get("XROUTE_PORT", "8000"))
DEBUG = os.environ.get("XROUTE_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="xroute",
    description="Cross-chain swap route optimizer",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - XROUTE_HOST: Host to bind to (default: 0.0.0.0)
    - XROUTE_PORT: Port to bind to (default: 8000)
    - XROUTE_DEBUG: Enable debug logging and reload mode (default: false)
    """
    configure_logging(logging.DEBUG if DEBUG else logging.INFO)
    uvicorn.run(
        "xroute.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
