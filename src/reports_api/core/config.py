import os

from fastapi import Request

# In a real deployment, load these from the environment or a config file
APPLICATION_NAME: str = os.getenv("APPLICATION_NAME", "reportsApp")
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./reports.sqlite3")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "2000"))

MODEL_MODULES: list[str] = [
    "reports_api.features.reports.models",
]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {  # This is an app label, can be anything
            "models": MODEL_MODULES,
            "default_connection": "default",
        }
    },
}


def get_application_name(request: Request) -> str:
    """FastAPI dependency returning the name used in alert headers.

    The application may override the configured value through
    ``app.state.application_name``.
    """
    return getattr(request.app.state, "application_name", APPLICATION_NAME)
