"""Tricheck configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Narrative judgment (LLM) ---------------------------------------
    judge_enabled: bool = False
    llm_provider: str = "openai"  # "openai" | "azure" | "local"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Azure OpenAI
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment: str = ""

    # Local / Ollama
    local_llm_base_url: str = "http://localhost:11434/v1"
    local_llm_model: str = "llama3"

    judge_temperature: float = 0.3

    # --- Outlet search (NewsAPI) ----------------------------------------
    outlet_search_enabled: bool = False
    newsapi_key: str = ""
    newsapi_base_url: str = "https://newsapi.org/v2"
    article_match_threshold: int = 30

    # --- Pipeline -------------------------------------------------------
    feed_signal_enabled: bool = False
    collaborator_timeout: float = 20.0  # seconds, network collaborators only

    # --- Server ---------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    internal_token: str = ""  # shared secret for /verify, empty disables auth
    allowed_origins: str = "*"  # comma-separated origins


settings = Settings()
