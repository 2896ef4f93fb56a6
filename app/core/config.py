from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "OwnItRight Notifications"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_HOST: Optional[str] = None
    DATABASE_PORT: str = "5432"
    DATABASE_USER: Optional[str] = None
    DATABASE_PASSWORD: Optional[str] = None
    DATABASE_NAME: Optional[str] = None

    DATABASE_URL: str = "sqlite:///./ownitright.db"
    TEST_DATABASE_URL: Optional[str] = None

    def __init__(self, **data):
        super().__init__(**data)
        if self.DATABASE_HOST:
            self.DATABASE_URL = (
                f'postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}'
                f'@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}'
            )

    # Email
    SENDGRID_API_KEY: Optional[str] = None
    EMAILS_FROM_EMAIL: str = "notifications@ownitright.com"
    EMAILS_FROM_NAME: str = "OwnItRight"
    APP_NAME: str = "OwnItRight"

    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"

settings = Settings()
