"""Run the server with uvicorn: ``python -m paygig``."""

import uvicorn

from paygig.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "paygig.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    main()
