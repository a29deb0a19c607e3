from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # core
    ENV: str = "dev"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # database
    # Plain string so sqlite:// and driver-qualified URLs are always accepted
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # cors
    FRONTEND_ORIGIN: str | None = None
    # Explicit debug-only switch for wide-open CORS in non-prod envs
    CORS_ALLOW_ALL_ORIGINS: bool = False

    # intake behaviour
    DEFAULT_ISSUE_CATEGORY: str = "General"
    # Off keeps one new link row per submission, even for a repeated pair
    DEDUPE_PERSON_ORGANIZATION_LINKS: bool = False
    # Application-side comparison of normalized names for near-miss organizations
    ORG_MATCH_CANDIDATE_SCAN: bool = True
    ORG_MATCH_CANDIDATE_LIMIT: int = 500

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "prod"


@lru_cache
def get_settings() -> Settings:
    return Settings()
