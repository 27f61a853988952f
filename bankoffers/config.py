"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = ""
    db_driver: str = "mysql+aiomysql"
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    db_pool_size: int = 10
    db_max_overflow: int = 0

    # Paths
    @property
    def base_dir(self) -> Path:
        return Path(__file__).parent.parent

    @property
    def storage_dir(self) -> Path:
        return self.base_dir / "storage"

    @property
    def sqlalchemy_url(self) -> str:
        """Resolve the database URL.

        DATABASE_URL wins when set. Otherwise the DB_* fields describe a
        server database once DB_NAME is given, and a local SQLite file is
        used as the fallback.
        """
        if self.database_url.strip():
            return self.database_url.strip()

        if self.db_name:
            url = URL.create(
                self.db_driver,
                username=self.db_user or None,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )
            return url.render_as_string(hide_password=False)

        return f"sqlite+aiosqlite:///{self.storage_dir / 'offers.db'}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
