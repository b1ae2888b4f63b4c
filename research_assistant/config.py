from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, populate_by_name=True, extra="ignore")

	# LLM provider settings
	default_llm_provider: Optional[str] = Field(
		default=None,
		alias="DEFAULT_LLM_PROVIDER",
		description="One of: openai, together, ollama. If None, auto-detect based on available env/host.",
	)
	openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
	together_api_key: Optional[str] = Field(default=None, alias="TOGETHER_API_KEY")
	ollama_base_url: str = Field(default="http://localhost:11434", alias="OLLAMA_BASE_URL")
	llm_model: Optional[str] = Field(
		default=None,
		alias="LLM_MODEL",
		description="Overrides the provider's default model for summaries and analysis.",
	)

	# Search providers
	crossref_mailto: Optional[str] = Field(
		default=None,
		alias="CROSSREF_MAILTO",
		description="Email used for polite Crossref requests",
	)
	semantic_scholar_api_key: Optional[str] = Field(default=None, alias="SEMANTIC_SCHOLAR_API_KEY")
	ncbi_api_key: Optional[str] = Field(default=None, alias="NCBI_API_KEY")
	ncbi_email: Optional[str] = Field(default=None, alias="NCBI_EMAIL")
	provider_timeout: float = Field(default=10.0, alias="PROVIDER_TIMEOUT")
	user_agent: str = Field(default="AI Research Assistant (academic research tool)", alias="USER_AGENT")

	# Persistence
	database_url: str = Field(default="sqlite:///./research_assistant.db", alias="DATABASE_URL")

	# Pipeline defaults
	default_search_limit: int = Field(default=10, ge=1, le=50, alias="DEFAULT_SEARCH_LIMIT")
	related_papers_provider: str = Field(default="semantic_scholar", alias="RELATED_PAPERS_PROVIDER")

	log_level: str = Field(default="INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
	return AppSettings()  # type: ignore[arg-type]
