"""Deployment settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Target environment
    stack_name: str = "LoR-ApiGateway"
    aws_account: str = ""  # Required for deploys; table ARNs are account-scoped
    aws_region: str = "us-west-2"

    # Gateway
    api_name: str = "LoR-Api"

    # Handler functions
    handlers_dir: str = "lib/handlers"  # one asset directory per handler
    lambda_runtime: str = "python3.12"
    lambda_memory_mb: int = 128
    lambda_timeout_seconds: int = 5

    # Externally managed resources
    riot_api_secret_arn: str = ""  # full ARN, including the random suffix
    table_names: str = "Player-Info,Player-Decks,Player-Matches"
    requests_layer_arn: str = ""
    lor_utilities_layer_arn: str = ""

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def table_names_list(self) -> list[str]:
        """Parse comma-separated table names, dropping blanks."""
        return [t.strip() for t in self.table_names.split(",") if t.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
