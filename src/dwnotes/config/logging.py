"""structlog configuration for dwnotes.

Two output modes, both on stderr so stdout stays free for note paths and
``--json`` results:
- Human (default): console renderer, logger names shown relative to
  ``dwnotes`` (``services.notes`` rather than ``dwnotes.services.notes``)
- JSON (--log-json): one JSON object per line with the full logger name

Every event carries the vault the command runs against (``vault=...``),
bound once per invocation through structlog's context variables.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

PACKAGE_LOGGER = "dwnotes"


def _shorten_logger_name(_logger: WrappedLogger, _method: str, event: EventDict) -> EventDict:
    name = event.get("logger")
    if isinstance(name, str) and name.startswith(f"{PACKAGE_LOGGER}."):
        event["logger"] = name[len(PACKAGE_LOGGER) + 1 :]
    return event


def bind_vault(vault_root: Path | None) -> None:
    """Attach *vault_root* to every subsequent event; ``None`` clears it."""
    structlog.contextvars.unbind_contextvars("vault")
    if vault_root is not None:
        structlog.contextvars.bind_contextvars(vault=str(vault_root))


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    vault_root: Path | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Stdlib loggers under ``dwnotes`` are rendered through the same
    processor chain, so ``logging.getLogger(__name__)`` output is structured
    too. Safe to call once per command; handlers are replaced, not stacked.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        vault_root: Vault bound into every event, when known.
    """
    dw_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        output_processors: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [
            _shorten_logger_name,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *output_processors,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(dw_level)
    bind_vault(vault_root)
