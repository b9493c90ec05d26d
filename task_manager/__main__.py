"""Run the service with uvicorn: python -m task_manager."""

import uvicorn

from task_manager.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "task_manager.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
