from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content store
    POSTS_DIR: str = "posts"
    DERIVE_READ_TIME: bool = False

    # Rendering
    MATH_ENABLED: bool = True
    HIGHLIGHT_STYLE: str = "material"

    # Site
    SITE_URL: str = "http://localhost:3000"
    SITE_TITLE: str = "inkwell"
    SITE_DESCRIPTION: str = ""
    BLOG_API_URL: str = "http://localhost:8000"

    # Postgres (newsletter subscriptions)
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DATABASE: str = "postgres_db"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def posts_path(self) -> Path:
        return Path(self.POSTS_DIR)

    @property
    def postgres_url(self) -> str:
        return f"postgresql://{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DATABASE}"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
