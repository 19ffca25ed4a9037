"""Centralized configuration using Pydantic Settings.

This module provides the construction options of a graph and the
logging setup in one place.

Configuration can be overridden via environment variables:
- TOLLGRAPH_GRAPH_LOGGING_LEVEL=STEPS
- TOLLGRAPH_GRAPH_IGNORE_ERRORS=true
- TOLLGRAPH_GRAPH_CONSTANT_NODE_COST=100
- TOLLGRAPH_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import LoggingLevel


class GraphConfig(BaseSettings):
    """Construction options of a weighted graph.

    Environment variables prefixed with TOLLGRAPH_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="TOLLGRAPH_GRAPH_")

    name: Optional[str] = None
    logging_level: LoggingLevel = LoggingLevel.NONE
    ignore_errors: bool = False
    auto_create_nodes: bool = False
    constant_node_cost: float = Field(default=0.0, ge=0)

    @field_validator("logging_level", mode="before")
    @classmethod
    def _parse_logging_level(cls, value: Any) -> Any:
        # Accept "steps", "STEPS", "2" as well as 2
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return int(text)
            try:
                return LoggingLevel[text.upper()]
            except KeyError:
                return value
        return value


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with TOLLGRAPH_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TOLLGRAPH_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.graph.constant_node_cost)
        print(config.observability.level)

    Environment variables prefixed with TOLLGRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="TOLLGRAPH_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
