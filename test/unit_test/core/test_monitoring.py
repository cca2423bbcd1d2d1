"""Unit tests for the Logfire monitoring helpers."""

from unittest.mock import MagicMock, patch

from fastapi import FastAPI

from slumbering_ancients.core import monitoring


class TestInitializeLogfire:
    """Test initialize_logfire switches."""

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", False)
    def test_disabled(self):
        assert monitoring.initialize_logfire() is False

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", True)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TOKEN", "")
    def test_enabled_without_token(self):
        assert monitoring.initialize_logfire() is False

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", True)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TOKEN", "test-token")
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_SERVICE_NAME", "test-service")
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENVIRONMENT", "test")
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_PYDANTIC_AI", True)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_SQLALCHEMY", False)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_HTTPX", False)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_FASTAPI", True)
    def test_configures_and_instruments(self):
        app = FastAPI()
        with (
            patch("logfire.configure") as configure,
            patch("logfire.instrument_pydantic_ai") as instrument_ai,
            patch("logfire.instrument_sqlalchemy") as instrument_sql,
            patch("logfire.instrument_httpx") as instrument_httpx,
            patch("logfire.instrument_fastapi") as instrument_fastapi,
        ):
            assert monitoring.initialize_logfire(app) is True

        configure.assert_called_once()
        assert configure.call_args.kwargs["token"] == "test-token"
        assert configure.call_args.kwargs["service_name"] == "test-service"
        assert configure.call_args.kwargs["environment"] == "test"
        instrument_ai.assert_called_once_with()
        instrument_sql.assert_not_called()
        instrument_httpx.assert_not_called()
        instrument_fastapi.assert_called_once_with(app=app)

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", True)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TOKEN", "test-token")
    def test_configure_failure_returns_false(self):
        with patch("logfire.configure", side_effect=RuntimeError("bad token")):
            assert monitoring.initialize_logfire() is False

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", True)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TOKEN", "test-token")
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_PYDANTIC_AI", False)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_SQLALCHEMY", False)
    @patch("slumbering_ancients.core.monitoring.LOGFIRE_TRACE_HTTPX", True)
    def test_instrumentation_failure_is_not_fatal(self):
        with (
            patch("logfire.configure"),
            patch("logfire.instrument_httpx", side_effect=RuntimeError("missing extra")),
        ):
            assert monitoring.initialize_logfire() is True


class TestLogHelpers:
    """Test the structured log helpers."""

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", False)
    def test_helpers_fall_back_to_debug_logging(self):
        with patch.object(monitoring, "logger") as mock_logger:
            monitoring.log_llm_call("gpt-4o", "chat", tokens_used=42, duration_ms=12.5)
            monitoring.log_api_request("GET", "/health", 200, 1.0)
            monitoring.log_wiki_sync(scraped=1, skipped=2, discovered=3, rate_limit_errors=0, incremental=True)
            monitoring.log_error("VectorSearchError", "no such function")
        assert mock_logger.debug.call_count == 4

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", True)
    def test_helpers_emit_to_logfire_when_enabled(self):
        fake_info = MagicMock()
        with patch("logfire.info", fake_info), patch.object(monitoring, "logger") as mock_logger:
            monitoring.log_api_request("POST", "/api/v1/maps", 201, 3.2)
        fake_info.assert_called_once_with(
            "API request completed", method="POST", path="/api/v1/maps", status_code=201, duration_ms=3.2
        )
        mock_logger.debug.assert_not_called()

    @patch("slumbering_ancients.core.monitoring.LOGFIRE_ENABLED", True)
    def test_logfire_errors_fall_back(self):
        with patch("logfire.error", side_effect=RuntimeError("not configured")), patch.object(
            monitoring, "logger"
        ) as mock_logger:
            monitoring.log_error("AnalysisParseError", "Failed to parse analysis results", {"map_id": "x"})
        mock_logger.debug.assert_called_once()
