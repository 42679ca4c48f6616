from __future__ import annotations

import logging

import uvicorn

from hive_idx.config import settings
from hive_idx.entrypoints.fastapi_app import create_app


def _quiet_logging() -> None:
    # Root defaults
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    # Quiet the usual offenders
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def main() -> None:
    _quiet_logging()
    logging.getLogger(__name__).info("Listings API starting (env=%s)", settings.ENV)
    uvicorn.run(create_app(), host="127.0.0.1", port=8000, log_config=None)


if __name__ == "__main__":
    main()
