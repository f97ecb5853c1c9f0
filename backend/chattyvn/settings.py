from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Without a key the tutor runs in heuristic fallback mode for the whole process
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")
	# Upper bound for a single generation call, in seconds
	gemini_timeout_seconds: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT_SECONDS")
	gemini_max_output_tokens: int = Field(default=500, validation_alias="GEMINI_MAX_OUTPUT_TOKENS")
	# Thinking tokens count against maxOutputTokens on 2.5 models; 0 disables thinking, unset omits the config
	gemini_thinking_budget: int | None = Field(default=0, validation_alias="GEMINI_THINKING_BUDGET")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	# Comma separated list, "*" allows any origin
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def cors_origin_list(self) -> list[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
