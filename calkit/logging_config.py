"""
Log rendering for the calkit shell.

Library modules log through ``logging.getLogger(__name__)``. This module only
decides where those records go and how they look: structlog renders them on
stderr, so command results printed on stdout stay alone there and headless
output can be diffed line by line.

The ``logging`` section of args/calkit.yaml picks the level and format;
``CALKIT_LOG_LEVEL`` and ``CALKIT_LOG_FORMAT=json`` override it. Only the
``calkit`` logger tree gets the chosen level. Other libraries stay at WARNING.

Usage:
    from calkit.config import load_config
    from calkit.logging_config import setup_logging

    setup_logging(load_config().logging)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import structlog

from calkit.config import LoggingConfig

# Applied to every stdlib record before rendering
_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="%H:%M:%S"),
]


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    # Plain text when stderr is redirected to a file
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(settings: Optional[LoggingConfig] = None) -> None:
    settings = settings or LoggingConfig()

    level_name = os.environ.get("CALKIT_LOG_LEVEL") or settings.level
    json_output = settings.json_output or os.environ.get("CALKIT_LOG_FORMAT", "").lower() == "json"

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("calkit").setLevel(getattr(logging, level_name.upper(), logging.WARNING))


__all__ = ["setup_logging"]
