from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    app_name: str = "togedoo"
    app_env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    log_level: str = "INFO"

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    ungfritid_base_url: str = "https://ungfritid.no/api/findactivities"
    ungfritid_area: str = "municipality"
    ungfritid_user_agent: str = "ToGeDoo/1.0 (FastAPI)"
    # None waits for the upstream indefinitely.
    ungfritid_timeout_seconds: float | None = None

    default_municipality: str = "Oslo"
    default_activity_limit: int = 50

    static_activities_path: str = str(PROJECT_ROOT / "data" / "activities.json")

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
    )

    @property
    def log_level_resolved(self) -> str:
        level = (self.log_level or "").strip().upper()
        return level or "INFO"


settings = Settings()
