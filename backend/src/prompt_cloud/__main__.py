import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run(
        "prompt_cloud.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
