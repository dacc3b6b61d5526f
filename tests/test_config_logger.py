"""
Tests for the configuration singleton and logger setup.
"""

import pytest

from config import ConfigurationManager, get_config
from invoice_lines.parsing.categories import CategoryClassifier
from invoice_lines.utils.logger import get_logger, setup_logger


class TestConfigurationManager:
    """Test cases for ConfigurationManager."""

    def test_singleton(self):
        assert ConfigurationManager() is ConfigurationManager()

    def test_dotted_keys(self):
        assert get_config("extraction.tax.default_rate") == 10.0
        assert get_config("review.min_line_items") == 3
        assert get_config("extraction.default_category") == "Groceries"

    def test_missing_key_default(self):
        assert get_config("extraction.nothing.here", "fallback") == "fallback"
        assert get_config("review.min_line_items.deeper", 7) == 7

    def test_custom_file(self, tmp_path, reset_config):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(
            "extraction:\n"
            "  default_category: Pantry\n"
            "  categories:\n"
            "    - name: Coffee\n"
            "      keywords: [bean]\n"
        )
        ConfigurationManager(str(config_file))

        classifier = CategoryClassifier()
        assert classifier.guess_category("Espresso Beans") == "Coffee"
        assert classifier.guess_category("Organic Kale") == "Pantry"
        assert get_config("extraction.tax.default_rate", 10.0) == 10.0

    def test_missing_file(self, tmp_path, reset_config):
        with pytest.raises(FileNotFoundError):
            ConfigurationManager(str(tmp_path / "absent.yaml"))


class TestLogger:
    """Test cases for logger helpers."""

    def test_namespacing(self):
        assert get_logger("invoice_lines.parsing.header").name == "invoice_lines.parsing.header"
        assert get_logger("main").name == "invoice_lines.main"

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger(level="DEBUG", log_file=str(log_file), quiet=True)
        try:
            get_logger("tests").info("parsed 3 items")
            for handler in logger.handlers:
                handler.flush()
            assert "parsed 3 items" in log_file.read_text(encoding="utf-8")
        finally:
            for handler in logger.handlers:
                handler.close()
            setup_logger(quiet=True)

    def test_repeated_setup_does_not_stack(self):
        setup_logger(quiet=False)
        logger = setup_logger(quiet=False)
        assert len(logger.handlers) == 1
        setup_logger(quiet=True)
