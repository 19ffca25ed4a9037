"""Process-wide logging setup driven by ObservabilityConfig."""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure the root logger from the observability settings.

    Graphs only emit records up to their own LoggingLevel; this decides
    where those records end up.
    """
    config = config or get_config().observability
    logging.basicConfig(level=config.level.upper(), format=config.format)
