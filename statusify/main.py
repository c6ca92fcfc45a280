"""Entry: validate configuration and start the API server."""
import logging

import uvicorn

from statusify.config import API_HOST, API_PORT, LOG_LEVEL, ConfigError, load_settings, validate_settings


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(levelname)s: %(message)s",
    )
    try:
        validate_settings(load_settings())
    except ConfigError as e:
        raise SystemExit(str(e))
    uvicorn.run(
        "statusify.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )


if __name__ == "__main__":
    main()
