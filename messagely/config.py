import os
from typing import List

from dotenv import load_dotenv


load_dotenv()


def _split(value: str) -> List[str]:
	return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
	APP_NAME: str = os.getenv("APP_NAME", "Messagely")
	DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./messagely.db")
	BCRYPT_WORK_FACTOR: int = int(os.getenv("BCRYPT_WORK_FACTOR", "12"))
	LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
	SQL_ECHO: bool = os.getenv("SQL_ECHO", "False").lower() == "true"
	ALLOWED_ORIGINS: List[str] = _split(os.getenv("ALLOWED_ORIGINS", "*"))


settings = Settings()
