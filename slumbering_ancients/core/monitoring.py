"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for tracing the
service, including:
- API endpoint tracing
- Chat, vision and embedding calls to the LLM provider
- Database operation monitoring
- Wiki synchronisation summaries
- Error tracking

All helpers are best effort: when Logfire is disabled or not configured they
fall back to debug-level standard logging.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "slumbering-ancients")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

LOGFIRE_TRACE_PYDANTIC_AI = os.getenv("LOGFIRE_TRACE_PYDANTIC_AI", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Instruments pydantic-ai, SQLAlchemy, httpx and (when ``app`` is given)
    FastAPI. Nothing happens unless ``LOGFIRE_ENABLED`` is set and a token is
    available.

    Returns:
        True when Logfire was configured.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return False

    import logfire

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    instrumentations = {
        "Pydantic AI": (LOGFIRE_TRACE_PYDANTIC_AI, logfire.instrument_pydantic_ai, {}),
        "SQLAlchemy": (LOGFIRE_TRACE_SQLALCHEMY, logfire.instrument_sqlalchemy, {}),
        "HTTPX": (LOGFIRE_TRACE_HTTPX, logfire.instrument_httpx, {}),
    }
    if app is not None:
        instrumentations["FastAPI"] = (LOGFIRE_TRACE_FASTAPI, logfire.instrument_fastapi, {"app": app})

    for name, (enabled, instrument, kwargs) in instrumentations.items():
        if not enabled:
            continue
        try:
            instrument(**kwargs)
            logger.info(f"Logfire: {name} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {name}: {e}")

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
    return True


def _emit(level: str, message: str, **attributes) -> bool:
    if not LOGFIRE_ENABLED:
        return False
    try:
        import logfire

        getattr(logfire, level)(message, **attributes)
        return True
    except Exception:
        return False


def log_llm_call(model: str, purpose: str, tokens_used: Optional[int] = None, duration_ms: Optional[float] = None) -> None:
    """
    Log an LLM model call with usage metrics.

    Args:
        model: The model name
        purpose: What the call was for (chat, map-analysis, embedding)
        tokens_used: Total tokens used in the call, if reported
        duration_ms: Call duration in milliseconds
    """
    if not _emit("info", "LLM call completed", model=model, purpose=purpose, tokens_used=tokens_used, duration_ms=duration_ms):
        logger.debug(f"LLM call completed: model={model}, purpose={purpose}, tokens_used={tokens_used}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _emit("info", "API request completed", method=method, path=path, status_code=status_code, duration_ms=duration_ms):
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")


def log_wiki_sync(scraped: int, skipped: int, discovered: int, rate_limit_errors: int, incremental: bool) -> None:
    """Log the outcome of a wiki synchronisation run."""
    if not _emit(
        "info",
        "Wiki sync completed",
        scraped=scraped,
        skipped=skipped,
        discovered=discovered,
        rate_limit_errors=rate_limit_errors,
        incremental=incremental,
    ):
        logger.debug(f"Wiki sync completed: scraped={scraped}, skipped={skipped}, discovered={discovered}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _emit("error", f"{error_type}: {error_message}", **(context or {})):
        logger.debug(f"{error_type}: {error_message}")
