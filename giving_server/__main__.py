"""Run the API with uvicorn: ``python -m giving_server``."""

import uvicorn

from giving_server.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "giving_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    main()
