import os


class Settings:
    """Runtime settings read from the environment."""

    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./smartgrid.db")
    REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Simulator
    SIM_NODES = int(os.environ.get("SIM_NODES", "10"))
    SIM_LOAD_SOURCES = int(os.environ.get("SIM_LOAD_SOURCES", "50"))
    SIM_NODE_BASE_CAPACITY = float(os.environ.get("SIM_NODE_BASE_CAPACITY", "100.0"))
    SIM_OVERLOAD_THRESHOLD = float(os.environ.get("SIM_OVERLOAD_THRESHOLD", "85.0"))
    SIM_UNDERLOAD_THRESHOLD = float(os.environ.get("SIM_UNDERLOAD_THRESHOLD", "40.0"))
    SIM_INTERVAL_SECONDS = int(os.environ.get("SIM_INTERVAL_SECONDS", "10"))
    API_ENDPOINT = os.environ.get("API_ENDPOINT", "http://localhost:8000")


settings = Settings()
