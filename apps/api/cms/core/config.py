# apps/api/cms/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Site CMS API"
    DEBUG: bool = False

    # DB & Auth
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # "https://foo.com,https://bar.com" (boşsa local vite origin'leri)
    CORS_ALLOW_ORIGINS: str = ""

    # Admin console
    SESSION_COOKIE_NAME: str = "cms_session"
    REDIRECT_COOKIE_NAME: str = "admin_redirect_path"
    ADMIN_LOGIN_PATH: str = "/admin/login"
    ADMIN_LANDING_PATH: str = "/admin"

    # Seed
    SEED_SECRET: str = ""
    SEED_DEFAULT_SETTINGS: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
