from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Notifier settings loaded from environment."""

    # Service
    service_name: str = "eventhub-notifier"
    log_level: str = "INFO"

    # Azure Event Hubs
    eventhub_address: str = ""  # Event hub name, or a connection string with SharedAccessKey
    eventhub_token: str = ""  # Bearer token, empty unless JWT auth is used
    eventhub_namespace: str = ""  # e.g. mynamespace.servicebus.windows.net

    # Publishing
    publish_timeout_seconds: float | None = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
