from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import orjson
import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from sortviz.core.config.settings import EngineSettings

SERVICE_NAME = "sortviz"


def _json_serializer(obj: Any, default: Any) -> str:
    # Step events carry index tuples; orjson renders them as arrays
    return orjson.dumps(obj, default=default, option=orjson.OPT_NON_STR_KEYS).decode("utf-8")


def _service_fields(env: str) -> Processor:
    """
    Stamp every entry with the service name and deployment environment.
    """

    def add(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("env", env)
        return event_dict

    return add


def build_processors(settings: EngineSettings) -> list[Processor]:
    processors: list[Processor] = [
        # run_id / algorithm bound by the run lifecycle
        structlog.contextvars.merge_contextvars,
        _service_fields(settings.env),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_json:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(serializer=_json_serializer),
        ]
    else:
        # Local terminal output; ConsoleRenderer formats exc_info itself
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return processors


def configure_logging(settings: EngineSettings, *, stream: TextIO | None = None) -> None:
    """
    Configure structured logging for the process from `settings`.

    Called once by the app factory. `stream` defaults to stdout.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    out = stream if stream is not None else sys.stdout

    structlog.configure(
        processors=build_processors(settings),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    # uvicorn and asyncio log through stdlib logging
    logging.basicConfig(level=log_level, format="%(message)s", handlers=[logging.StreamHandler(out)])


def bind_context(**values: Any) -> None:
    """
    Bind values to every log entry of the current task, e.g.
    bind_context(run_id="20261017T101500Z_ab12cd34", algorithm="quick-sort").
    """
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
