from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    allowed_origins: str = "http://localhost:8501"

    hospital_name: str = "Dr. Pujar Hospital"
    laboratory_name: str = "Diagnostic Laboratory"
    currency_symbol: str = "₹"
    handoff_key: str = "billingData"


settings = Settings()
