import os
import sys
import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Literal


class Settings(BaseSettings):
    # The defaults here provide a fully working local configuration so new
    # contributors can run the stack without editing environment variables.
    PROJECT_NAME: str = "Job Board"
    ENV: str = "local"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    # MongoDB settings (default to local MongoDB and database name 'jobboard')
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "jobboard"
    JWT_SECRET_KEY: str = "job-board-dev-jwt-signing-key-change-me"
    JWT_EXPIRE_MINUTES: int = 60
    # SendGrid; email endpoints answer 503 until both key and sender are set
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_FROM_EMAIL: Optional[str] = None
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    SENDGRID_TIMEOUT_SECONDS: float = 10.0
    CONTACT_TO_EMAIL: Optional[str] = None
    RATING_MAX_ATTEMPTS: int = 5
    SAVE_MAX_ATTEMPTS: int = 5
    DEFAULT_PAGE_SIZE: int = 10

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), os.pardir, os.pardir, ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


_LEVEL_BY_ENV: dict[Literal["production", "staging", "local"], int] = {
    "production": logging.INFO,
    "staging": logging.DEBUG,
    "local": logging.DEBUG,
}


def setup_logging() -> None:
    """
    Configure the root logger exactly once,

    * Console only (StreamHandler -> stderr)
    * ISO - 8601 timestamps
    * Env - based log level: production -> INFO, else DEBUG
    * Prevents duplicate handler creation if called twice
    """
    root = logging.getLogger()
    if root.handlers:
        return

    env = settings.ENV.lower()
    level = _LEVEL_BY_ENV.get(env, logging.INFO)

    formatter = logging.Formatter(
        fmt="[%(asctime)s - %(name)s - %(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root.setLevel(level)
    root.addHandler(handler)

    for noisy in ("pymongo", "uvicorn.access", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
