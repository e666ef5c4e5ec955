import json
import logging
from unittest.mock import patch

from invoicely.logging import QUIET_LOGGERS, TEXT_FORMAT, configure_logging, reconfigure


class TestConfigureLogging:
    def test_text_format(self):
        with patch("invoicely.logging.settings") as mock_settings:
            mock_settings.log_level = "DEBUG"
            mock_settings.log_json = False
            configure_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert root.handlers[0].formatter._fmt == TEXT_FORMAT

    def test_json_format(self):
        with patch("invoicely.logging.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_json = True
            configure_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        from pythonjsonlogger.json import JsonFormatter

        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self):
        with patch("invoicely.logging.settings") as mock_settings:
            mock_settings.log_level = "chatty"
            mock_settings.log_json = False
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_reconfigure_does_not_stack_handlers(self):
        configure_logging()
        reconfigure()
        assert len(logging.getLogger().handlers) == 1

    def test_json_records_carry_app_name(self):
        with patch("invoicely.logging.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_json = True
            configure_logging()

        formatter = logging.getLogger().handlers[0].formatter
        record = logging.LogRecord("invoicely.test", logging.INFO, __file__, 1, "hello", None, None)
        payload = json.loads(formatter.format(record))
        assert payload["app"] == "invoicely"
        assert payload["level"] == "INFO"
        assert payload["message"] == "hello"

    def test_quiets_noisy_libraries(self):
        configure_logging()
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
