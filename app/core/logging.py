# app/core/logging.py
import logging
import sys

import structlog

# Processors applied to every record, whether it came from stdlib logging or structlog.
# ExtraAdder turns ``extra={...}`` fields into event keys.
SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


def build_formatter(env: str) -> structlog.stdlib.ProcessorFormatter:
    """JSON lines for prod and staging, a console layout for everything else."""
    if env in ("prod", "staging"):
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def setup_logging(env: str = "dev") -> logging.Logger:
    """
    Configure the root logger for the given environment.

    - prod: JSON, INFO and above
    - staging: JSON, DEBUG and above
    - anything else: console text, DEBUG and above
    """
    level = logging.INFO if env == "prod" else logging.DEBUG

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)  # Print logs to console
    handler.setFormatter(build_formatter(env))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    return logging.getLogger("students_api")
