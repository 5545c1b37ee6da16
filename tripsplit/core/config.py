from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Tripsplit Backend"
    DATABASE_URL: str
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False
    DB_CONNECT_RETRIES: int = 5

    class Config:
        env_file = ".env"

settings = Settings()
