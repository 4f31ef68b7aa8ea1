from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Photo Map Clustering"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # Marker clustering
    MARKER_CACHE_SIZE: int = 128  # 0 disables memoization
    CLUSTER_WARN_POINT_COUNT: int = 1000

    class Config:
        env_file = ".env"

configs = Settings()
