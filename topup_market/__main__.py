"""Run the API with uvicorn using the ``server`` settings section."""
import uvicorn

from topup_market.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "topup_market.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
