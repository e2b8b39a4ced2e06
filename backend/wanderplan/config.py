from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_timeout_seconds: float = 60.0
    gemini_max_attempts: int = Field(default=3, ge=1)

    # Budget reconciliation: unset aims for the middle of the range
    budget_target_fraction: float | None = None

    # CORS
    cors_origins: str = "*"
    cors_allow_headers: str = "authorization, x-client-info, apikey, content-type"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_header_list(self) -> list[str]:
        # Wildcard origins accept any requested header as well
        if "*" in self.cors_origin_list:
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
