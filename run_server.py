"""Entry point for running the incident reporting API with Uvicorn."""
from __future__ import annotations

import os

import uvicorn

from incident_reporting.config import get_settings


def main() -> None:
  settings = get_settings()
  reload = os.getenv("UVICORN_RELOAD", "false").lower() == "true"
  # Uvicorn turns SIGINT/SIGTERM into the app shutdown event, which closes the store.
  uvicorn.run("incident_reporting.main:app", host="0.0.0.0", port=settings.port, reload=reload)


if __name__ == "__main__":
  main()
