"""Run the API server with uvicorn: ``python -m slumbering_ancients.server``."""

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run(
        "slumbering_ancients.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
