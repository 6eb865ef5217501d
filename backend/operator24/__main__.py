"""Run the Operator24 backend with uvicorn: ``python -m operator24``."""
import uvicorn

from operator24.config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run(
        "operator24.main:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
