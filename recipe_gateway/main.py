import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "recipe_gateway.app:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
