from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MENTORCONNECT_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./mentorconnect.db"

    # Scheduling
    slot_step_minutes: int = Field(default=30, gt=0)
    seed_default_schedules: bool = True


def get_settings() -> Settings:
    return Settings()
