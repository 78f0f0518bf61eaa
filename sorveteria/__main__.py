"""Run the development server: ``python -m sorveteria``."""

import uvicorn

from .config import settings


def main() -> None:
    uvicorn.run(
        "sorveteria.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
