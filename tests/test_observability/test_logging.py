"""
Tests for setup_logging(), the logger factories and header redaction.

structlog and logging keep global state, so every test starts from a clean
configuration.
"""

import json
import logging
from io import StringIO

import pytest
import structlog
import structlog.testing

import square_sdk.core.pipeline as pipeline_module
from square_sdk.core.request_builder import RequestBuilder
from square_sdk.core.schema import Schema
from square_sdk.observability import get_logger, get_sdk_logger, mask_headers, setup_logging
from square_sdk.observability.logging import add_severity_level, redact_headers
from tests.fixtures import make_response


@pytest.fixture
def clean_logging():
    """Reset logging and structlog before and after each test."""
    original_handlers = logging.root.handlers[:]

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()

    yield

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()
    logging.root.handlers = original_handlers


def capture(emit, level=logging.INFO) -> list[str]:
    """Run ``emit`` with a root handler attached; return the emitted lines."""
    logging.root.setLevel(level)
    captured_output = StringIO()
    handler = logging.StreamHandler(captured_output)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.root.addHandler(handler)
    try:
        emit()
        handler.flush()
    finally:
        logging.root.removeHandler(handler)
    return [line for line in captured_output.getvalue().splitlines() if line.strip()]


class TestSetupLogging:
    def test_json_mode(self, clean_logging):
        setup_logging(level="INFO", json_logs=True, include_timestamp=True)
        logger = structlog.get_logger("test_json")

        lines = capture(lambda: logger.info("json_test_event", value=123))

        parsed = json.loads(lines[-1])
        assert parsed["event"] == "json_test_event"
        assert parsed["value"] == 123
        assert parsed["app"] == "square-sdk"
        assert parsed["severity"] == "INFO"
        assert "timestamp" in parsed

    def test_without_timestamp(self, clean_logging):
        setup_logging(level="INFO", json_logs=True, include_timestamp=False)
        logger = structlog.get_logger("test_no_ts")

        lines = capture(lambda: logger.info("no_timestamp_test"))

        assert "timestamp" not in json.loads(lines[-1])

    def test_text_mode(self, clean_logging):
        setup_logging(level="INFO", json_logs=False)
        logger = structlog.get_logger("test_text")

        lines = capture(lambda: logger.info("text_test_event", value=456))

        assert any("text_test_event" in line for line in lines)

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_root_level(self, clean_logging, level):
        setup_logging(level=level, json_logs=True)

        assert logging.root.level == getattr(logging, level)

    def test_invalid_level_falls_back_to_info(self, clean_logging):
        setup_logging(level="INVALID_LEVEL", json_logs=True)

        assert logging.root.level == logging.INFO


class TestLoggerFactories:
    def test_get_logger_binds_context(self, clean_logging):
        setup_logging(level="INFO", json_logs=True)
        logger = get_logger("my_module", layer="core", component="schema", extra="x")

        parsed = json.loads(capture(lambda: logger.info("test_event"))[-1])

        assert parsed["module"] == "my_module"
        assert parsed["layer"] == "core"
        assert parsed["component"] == "schema"
        assert parsed["extra"] == "x"

    def test_sdk_logger_defaults_to_transport_layer(self, clean_logging):
        setup_logging(level="INFO", json_logs=True)
        logger = get_sdk_logger("pipeline", environment="sandbox")

        parsed = json.loads(capture(lambda: logger.info("request_succeeded"))[-1])

        assert parsed["layer"] == "transport"
        assert parsed["component"] == "pipeline"
        assert parsed["module"] == "square_sdk"
        assert parsed["environment"] == "sandbox"

    def test_authorization_never_logged(self, clean_logging):
        setup_logging(level="INFO", json_logs=True)
        logger = get_sdk_logger("pipeline")

        lines = capture(
            lambda: logger.info(
                "request_started",
                headers={"Authorization": "Bearer secret", "Square-Version": "2024-02-28"},
            )
        )

        assert "secret" not in lines[-1]
        assert json.loads(lines[-1])["headers"]["Square-Version"] == "2024-02-28"


class TestProcessors:
    def test_redact_headers_is_case_insensitive(self):
        event = {"headers": {"authorization": "Bearer a", "Proxy-Authorization": "b", "X": "c"}}

        result = redact_headers(None, "info", event)

        assert result["headers"] == {
            "authorization": "***",
            "Proxy-Authorization": "***",
            "X": "c",
        }

    def test_redact_ignores_events_without_headers(self):
        assert redact_headers(None, "info", {"event": "x"}) == {"event": "x"}

    def test_severity_mapping(self):
        assert add_severity_level(None, "warning", {"level": "warning"})["severity"] == "WARNING"

    def test_mask_headers_returns_copy(self):
        headers = {"Authorization": "Bearer a"}

        assert mask_headers(headers) == {"Authorization": "***"}
        assert headers == {"Authorization": "Bearer a"}


class TestRequestLogging:
    @pytest.fixture
    def fresh_pipeline_logger(self, monkeypatch):
        """Module loggers cache on first use; give the pipeline a new one."""
        monkeypatch.setattr(pipeline_module, "log", get_sdk_logger("pipeline", layer="core"))

    @pytest.mark.asyncio
    async def test_request_headers_are_logged_redacted(
        self, clean_logging, fresh_pipeline_logger, make_pipeline, transport, client_config
    ):
        setup_logging(level="DEBUG", json_logs=True)
        transport.queue(make_response(200, "{}"))
        descriptor = RequestBuilder("GET", "/v2/locations").requires_auth().build()

        captured_output = StringIO()
        handler = logging.StreamHandler(captured_output)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(handler)
        try:
            await make_pipeline().execute(descriptor, Schema(dict))
        finally:
            logging.root.removeHandler(handler)

        output = captured_output.getvalue()
        started = next(
            json.loads(line) for line in output.splitlines() if "request_started" in line
        )
        assert client_config.access_token not in output
        assert started["headers"]["Authorization"] == "***"
        assert started["headers"]["Square-Version"] == client_config.square_version

    @pytest.mark.asyncio
    async def test_headers_masked_without_configuration(
        self, clean_logging, fresh_pipeline_logger, make_pipeline, transport
    ):
        transport.queue(make_response(200, "{}"))
        descriptor = RequestBuilder("GET", "/v2/locations").requires_auth().build()

        with structlog.testing.capture_logs() as logs:
            await make_pipeline().execute(descriptor, Schema(dict))

        started = next(entry for entry in logs if entry["event"] == "request_started")
        assert started["headers"]["Authorization"] == "***"
