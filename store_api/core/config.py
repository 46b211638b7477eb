from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    database_url: str = "sqlite:///./store.db"
    sql_echo: bool = False

    # "development" exposes exception text in 500 responses
    environment: str = "production"
    log_level: str = "INFO"

    slow_request_ms: int = 500
    default_page_size: int = 10

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
