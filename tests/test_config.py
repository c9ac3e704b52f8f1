"""
Tests for Configuration and Logging Utilities
==============================================
"""

import logging

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from spatial_input.utils.config import Config
from spatial_input.utils.logger import log_timing, setup_logging


@pytest.fixture(autouse=True)
def fresh_config():
    Config.reset()
    yield
    Config.reset()


def write_config(tmp_path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


class TestConfig:
    """Test suite for the YAML configuration manager."""

    def test_singleton(self):
        assert Config() is Config()

    def test_load_and_get(self, tmp_path):
        path = write_config(tmp_path, (
            "spatial_input:\n"
            "  rotation_threshold_deg: 0.5\n"
            "  drag_distance_threshold: 0.1\n"
            "demo:\n"
            "  ticks: 10\n"
        ))
        config = Config().load(path)

        assert config.get("spatial_input.rotation_threshold_deg") == 0.5
        assert config.spatial_input["drag_distance_threshold"] == 0.1
        assert config.demo == {"ticks": 10}

    def test_get_default(self, tmp_path):
        config = Config().load(write_config(tmp_path, "demo:\n  ticks: 5\n"))

        assert config.get("demo.fps", 30.0) == 30.0
        assert config.get("missing.key") is None
        assert config.get_section("spatial_input") == {}

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = Config().load(str(tmp_path / "absent.yaml"))

        assert config.get("spatial_input.rotation_threshold_deg", 0.3) == 0.3
        assert "Config file not found" in caplog.text

    def test_wrong_type_warns(self, tmp_path, caplog):
        path = write_config(tmp_path, (
            "spatial_input:\n"
            "  rotation_threshold_deg: fast\n"
            "  count_duplicate_attach: true\n"
        ))
        with caplog.at_level(logging.WARNING):
            Config().load(path)

        assert "spatial_input.rotation_threshold_deg" in caplog.text
        assert "count_duplicate_attach" not in caplog.text

    def test_int_accepted_for_float(self, tmp_path):
        path = write_config(tmp_path, (
            "spatial_input:\n"
            "  rotation_threshold_deg: 1\n"
            "  drag_distance_threshold: 0.1\n"
            "  count_duplicate_attach: false\n"
            "logging:\n"
            "  level: INFO\n"
            "demo:\n"
            "  ticks: 10\n"
            "  fps: 30\n"
        ))
        config = Config().load(path)

        assert config._validate() == []

    def test_shipped_config_is_valid(self):
        """The repository's own config/config.yaml passes validation."""
        config = Config().load()

        assert config._validate() == []
        assert config.get("spatial_input.rotation_threshold_deg") == 0.3


class TestLogging:
    """Test suite for logging helpers."""

    @pytest.fixture
    def root_logger(self):
        """Restore the root logger's handlers after setup_logging replaces them."""
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield root
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_setup_logging_level(self, root_logger):
        setup_logging(level="debug")

        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1

    def test_setup_logging_file(self, tmp_path, root_logger):
        log_file = tmp_path / "logs" / "spatial.log"
        setup_logging(level="INFO", log_file=str(log_file))

        assert log_file.parent.is_dir()
        assert len(root_logger.handlers) == 2

    def test_log_timing_preserves_result(self, caplog):
        @log_timing
        def work(x):
            return x * 2

        with caplog.at_level(logging.DEBUG):
            assert work(21) == 42

        assert work.__name__ == "work"
        assert "work took" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
