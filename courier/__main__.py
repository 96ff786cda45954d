"""Run the Courier API server: python -m courier"""

import uvicorn

from courier.api.dependencies import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "courier.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
