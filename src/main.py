from __future__ import annotations

import uvicorn

from src.config import settings


def main(host: str = settings.app_host, port: int = settings.app_port) -> None:
    """Serve the tool API; uvicorn handles SIGINT and runs the shutdown hooks."""
    uvicorn.run("src.app:app", host=host, port=port)


if __name__ == "__main__":
    main()
