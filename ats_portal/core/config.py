"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SKILL_KEYWORDS = (
    "python,java,c++,c#,javascript,typescript,"
    "react,node,express,angular,vue,"
    "html,css,tailwind,bootstrap,"
    "sql,mysql,postgresql,mongodb,oracle,"
    "aws,azure,gcp,docker,kubernetes,"
    "tensorflow,pytorch,scikit-learn,keras,"
    "hadoop,spark,tableau,powerbi,"
    "git,linux,bash"
)

DEFAULT_RESUME_KEYWORDS = "experience,education,skills,projects,summary,work,internship"


def _split_csv(value: str) -> List[str]:
    return [item.strip().lower() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "ats_portal"

    # LLM (any OpenAI-compatible endpoint; Gemini exposes one)
    llm_api_key: str = ""
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    # Tried in order until one answers
    llm_models: str = "gemini-2.5-flash,gemini-2.0-flash,gemini-1.5-pro,gemini-pro"
    llm_request_timeout: float = 30.0
    llm_total_timeout: float = 90.0

    # Heuristic matcher vocabularies (comma separated)
    skill_keywords: str = DEFAULT_SKILL_KEYWORDS
    resume_keywords: str = DEFAULT_RESUME_KEYWORDS

    # Auth
    admin_email: str = "admin"

    # Analysis
    persist_analysis_results: bool = False
    max_upload_mb: int = 5

    # YouTube course lookup
    youtube_api_key: str = ""
    youtube_api_url: str = "https://www.googleapis.com/youtube/v3"

    # App
    cors_origins: str = "*"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def model_candidates(self) -> List[str]:
        """Ordered model names, blanks dropped."""
        return [m.strip() for m in self.llm_models.split(",") if m.strip()]

    @property
    def skill_vocabulary(self) -> frozenset:
        return frozenset(_split_csv(self.skill_keywords))

    @property
    def resume_sections(self) -> List[str]:
        return _split_csv(self.resume_keywords)

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
