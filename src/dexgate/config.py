"""Application configuration using pydantic-settings.

These are process-level settings (where the config tree lives, how the API
binds). The connector/chain configuration tree itself is held by
dexgate.configstore.NamespaceStore.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Configuration tree
    # ======================
    conf_dir: str = Field(
        default="conf", description="Directory holding one YAML file per namespace"
    )
    default_pool_network: str = Field(
        default="mainnet-beta",
        description="Network preferred when resolving a connector's default pools",
    )
    token_lock_timeout: float = Field(
        default=30.0, description="Seconds to wait for a token-list file lock"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=15888, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Chains and connectors
    # ======================
    rpc_timeout: float = Field(default=10.0, description="Chain RPC timeout in seconds")
    clmm_sdk: str = Field(
        default="",
        description="CLMM trade-construction SDK factory as 'module:callable' (empty = none)",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict for diagnostics."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "conf_dir": self.conf_dir,
            "default_pool_network": self.default_pool_network,
            "clmm_sdk": self.clmm_sdk or "(not set)",
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
