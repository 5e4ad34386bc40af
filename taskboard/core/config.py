from os import getenv


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./data/app.db")
    SQL_ECHO = getenv("SQL_ECHO", "0") in ("1", "true", "True")

    DEFAULT_PAGE_SIZE = int(getenv("DEFAULT_PAGE_SIZE", "20"))
    MAX_PAGE_SIZE = int(getenv("MAX_PAGE_SIZE", "200"))  # au-delà on retombe sur la valeur par défaut

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    HOST = getenv("HOST", "0.0.0.0")
    PORT = int(getenv("PORT", "8080"))
    STATIC_DIR = getenv("STATIC_DIR", "web")


settings = Settings()
