import json
import logging

import pytest

import logger_setup


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "run_id": "test-run",
        "master_seed": 0,
        "logging": {"level": "DEBUG", "format": "%(levelname)s - %(message)s"},
        "simulation": {},
    }))
    yield path
    logger = logging.getLogger("ghg_sim")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_logging_writes_run_log(config_file, tmp_path):
    logger = logger_setup.setup_logging(str(config_file))
    logger.debug("spawned CO2")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "runs" / "test-run" / "simulation.log"
    assert log_file.exists()
    contents = log_file.read_text()
    assert "Logging initialized. Run ID: test-run" in contents
    assert "DEBUG - spawned CO2" in contents
    assert logger.propagate is False


def test_setup_logging_is_idempotent(config_file):
    logger_setup.setup_logging(str(config_file))
    logger = logger_setup.setup_logging(str(config_file))
    assert len(logger.handlers) == 2


def test_missing_config_propagates(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        logger_setup.setup_logging("missing.json")


def test_log_directory_is_configurable(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "run_id": "custom",
        "logging": {"level": "info", "format": "%(message)s", "directory": "logs"},
    }))
    logger = logger_setup.setup_logging(str(path))
    try:
        assert (tmp_path / "logs" / "custom" / "simulation.log").exists()
        assert logger.level == logging.INFO
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
