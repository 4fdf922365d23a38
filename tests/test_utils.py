import json
import logging

import pytest

from utils import load_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_load_config_reads_sections(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation_parameters": {"particle_count": 4}}))
    assert load_config(str(path)) == {"simulation_parameters": {"particle_count": 4}}


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_load_config_propagates_missing_and_broken_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(broken))


def test_setup_logging_is_idempotent(tmp_path, restore_root_logger):
    config = {"logging": {"level": "debug", "log_file": str(tmp_path / "logs" / "run.log")}}
    setup_logging(config)
    setup_logging(config)

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert (tmp_path / "logs").is_dir()
    for handler in root.handlers:
        handler.close()


def test_setup_logging_without_file(restore_root_logger):
    setup_logging({"logging": {"log_file": None}})
    assert len(restore_root_logger.handlers) == 1
