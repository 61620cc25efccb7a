"""
Core configuration module for the Interview AI service.
Loads settings from environment variables and config files.
"""
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


CONFIG_DIR = Path(__file__).parent.parent / "config"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Application
    app_name: str = "Interview_AI"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    
    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    
    # Session storage: "memory" or "mongodb"
    session_store: str = "memory"
    
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "interview-ai"
    
    # JWT Authentication
    auth_enabled: bool = True
    jwt_secret_key: str = "your-super-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24
    
    # Model Provider Overrides
    provider_llm: Optional[str] = None
    provider_llm_model: Optional[str] = None
    
    # OpenAI-compatible endpoint
    openai_base_url: str = "https://api.openai.com/v1"
    openai_api_key: Optional[str] = None
    
    # Ollama
    ollama_api_url: str = "http://localhost:11434"
    
    # Interview behaviour
    llm_timeout_seconds: float = 30.0
    max_questions: int = 10
    report_fallback_enabled: bool = True
    
    # Response archive
    archive_responses: bool = False
    responses_dir: str = "responses"
    
    @property
    def uses_mongodb(self) -> bool:
        return self.session_store.lower() == "mongodb"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_model_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load model configuration from YAML file.
    Environment variables can override config values.
    """
    if config_path is None:
        config_path = CONFIG_DIR / "models.yaml"
    else:
        config_path = Path(config_path)
    
    if not config_path.exists():
        raise FileNotFoundError(f"Model config not found: {config_path}")
    
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    
    # Apply environment variable overrides
    settings = get_settings()
    llm_config = config.setdefault("providers", {}).setdefault("llm", {})
    
    if settings.provider_llm:
        llm_config["provider"] = settings.provider_llm
    
    if settings.provider_llm_model:
        llm_config["model"] = settings.provider_llm_model
    
    return config
