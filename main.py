"""Feed API - Main application entry point."""

from feed_api.config import get_settings
from feed_api.factory import create_app
from feed_api.logging import setup_logging

settings = get_settings()
setup_logging(settings)

app = create_app(settings)


def main():
    """Entry point for running the application."""
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8080,
        reload=settings.env == "dev",
    )


if __name__ == "__main__":
    main()
