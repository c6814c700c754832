"""Tests for the component logger."""

import logging

import pytest
from rich.logging import RichHandler

from patternsmith.utils.logger import ComponentLogger, get_logger


class TestGetLogger:
    def test_component_logger(self):
        logger = get_logger("synthesizer")
        assert isinstance(logger, ComponentLogger)
        assert logger.component_name == "synthesizer"
        assert logger.name == "patternsmith.synthesizer"

    def test_color_from_config(self):
        assert get_logger("session").color == "magenta"

    def test_unknown_component_is_white(self):
        assert get_logger("unconfigured_component").color == "white"

    def test_custom_logger(self):
        logger = get_logger(name="custom_logger", color="blue")
        assert logger.component_name == "custom_logger"
        assert logger.color == "blue"
        assert logger.name == "custom_logger"

    def test_name_required(self):
        with pytest.raises(ValueError, match="Component name is required"):
            get_logger()

    def test_single_rich_handler(self):
        get_logger("synthesizer")
        get_logger("session")
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1


class TestComponentLogger:
    @pytest.fixture
    def base_logger(self):
        logger = logging.getLogger("patternsmith.test_component")
        logger.setLevel(logging.DEBUG)
        return logger

    def test_basic_logging_methods(self, base_logger):
        logger = ComponentLogger(base_logger, "test_component", "cyan")

        logger.info("Info message")
        logger.debug("Debug message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.success("Success message")
        logger.key_info("Key info message")
        logger.timing("Timing message")

    def test_messages_carry_component_prefix(self, base_logger, caplog):
        logger = ComponentLogger(base_logger, "test_component", "cyan")

        with caplog.at_level(logging.INFO, logger=base_logger.name):
            logger.info("hello")

        assert "Test_Component: hello" in caplog.text

    def test_pattern_brackets_are_escaped(self, base_logger, caplog):
        logger = ComponentLogger(base_logger, "test_component", "cyan")

        with caplog.at_level(logging.INFO, logger=base_logger.name):
            logger.info("Generated [a-z]+")

        assert "\\[a-z]+" in caplog.text

    def test_level_passthrough(self, base_logger):
        logger = ComponentLogger(base_logger, "test_component")
        logger.setLevel(logging.WARNING)
        assert logger.level == logging.WARNING
        assert not logger.isEnabledFor(logging.INFO)
