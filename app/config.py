from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    FEED_ENDPOINT: str = "https://api.weekday.technology/adhoc/getSampleJdJSON"
    FEED_PAGE_SIZE: int = 12
    FEED_OFFSET_STEP: int | None = None   # None -> FEED_PAGE_SIZE
    FEED_TIMEOUT: float = 30.0
    FEED_FETCH_ATTEMPTS: int = 3

    # timer-driven load-more; 0 disables
    FEED_AUTOLOAD_SECONDS: int = 0

    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
