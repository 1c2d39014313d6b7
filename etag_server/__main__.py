"""Module entrypoint: ``python -m etag_server`` starts the API under uvicorn."""

from __future__ import annotations

import uvicorn

from .config import load_settings


def main() -> None:
    settings = load_settings()

    uvicorn.run(
        "etag_server.server:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        # Usually deployed behind a reverse proxy.
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
