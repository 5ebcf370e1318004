"""Run the tracker API with uvicorn: `python -m tracker`."""

import uvicorn

from tracker.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tracker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
