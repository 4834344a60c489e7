"""Configuration for Page Model Service.

Uses Pydantic settings for environment-based configuration.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class RenderMode(str, Enum):
    """Which rendering pass a gateway instance serves."""

    SERVER = "server"
    CLIENT = "client"


class PageModelSettings(BaseSettings):
    """Configuration settings for Page Model Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PAGE_MODEL_SERVICE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    SERVICE_NAME: str = "page-model-service"

    # Environment
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=4102, description="HTTP server port")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Content-management backend endpoints
    CMS_BASE_URL: str = Field(
        default="http://localhost:8080",
        description="Base URL of the live delivery API",
    )
    CMS_PREVIEW_BASE_URL: str | None = Field(
        default=None,
        description="Base URL of the preview API (defaults to CMS_BASE_URL)",
    )
    CMS_CONTEXT_PATH: str = Field(default="site", description="Site web application context")
    CMS_CHANNEL_PATH: str = Field(default="", description="Channel mount path, if any")
    CMS_PREVIEW_PREFIX: str = Field(
        default="_cmsinternal",
        description="Path segment marking preview requests",
    )
    CMS_API_PATH: str = Field(default="resourceapi", description="Page model API mount")
    CMS_COMPONENT_RENDERING_URL_SUFFIX: str = Field(
        default="?_hn:type=component-rendering&_hn:ref=",
        description="Suffix addressing a single component for rendering",
    )

    # Page model behaviour
    DEBUGGING: bool = Field(default=False, description="Verbose page model logging")
    TRANSFER_STATE: bool = Field(
        default=True,
        description="Hand page models from server to client rendering",
    )
    RENDER_MODE: RenderMode = Field(
        default=RenderMode.SERVER,
        description="Rendering pass served by gateways built from this config",
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="HTTP client request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="HTTP client connection timeout in seconds",
    )

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION


# Global settings instance
settings = PageModelSettings()
