"""
Run the API with uvicorn: python -m event_registry
"""

import uvicorn

from event_registry.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "event_registry.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    main()
