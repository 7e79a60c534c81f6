# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Accounts & Products API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if o.strip()
    ]

    # Bearer token settings
    # JWT_EXPIRE_MINUTES unset -> tokens carry no "exp" claim
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int | None = _optional_int("JWT_EXPIRE_MINUTES")

    # Uploaded files: bytes go to FILE_DIRECTORY/<module>, clients see UPLOADS_URL/<module>
    file_directory: str = os.getenv("FILE_DIRECTORY", "public/uploads")
    uploads_url: str = os.getenv("UPLOADS_URL", "/uploads")

    # Moderation listing
    moderation_page_size: int = int(os.getenv("MODERATION_PAGE_SIZE", "10"))

    # Default admin provisioning (see app.core.bootstrap)
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")

settings = Settings()  # Instantiate configuration
