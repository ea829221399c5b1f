###########EXTERNAL IMPORTS############

import pytest
from pathlib import Path

#######################################

#############LOCAL IMPORTS#############

from medianwindow.controller.config import load_window_options, load_polling_interval, check_config_valid
from medianwindow.controller.exceptions import WindowConfigError
from medianwindow.model.window import WindowOptions

#######################################

CONFIG_KEYS = ("WINDOW_CAPACITY", "WINDOW_EVICT_FROM_FRONT", "POLLING_INTERVAL_SECONDS")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):

    # setenv before delenv so teardown also drops values written by load_dotenv
    for key in CONFIG_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    yield


def write_env(tmp_path: Path, content: str) -> str:
    config_file = tmp_path / "window_options.env"
    config_file.write_text(content)
    return str(config_file)


def test_load_full_options(tmp_path: Path):
    config_file = write_env(tmp_path, "WINDOW_CAPACITY=120\nWINDOW_EVICT_FROM_FRONT=false\n")
    assert load_window_options(config_file) == WindowOptions(capacity=120, evict_from_front=False)


def test_evict_from_front_defaults_to_true(tmp_path: Path):
    config_file = write_env(tmp_path, "WINDOW_CAPACITY=0\n")
    assert load_window_options(config_file) == WindowOptions(capacity=0, evict_from_front=True)


def test_missing_capacity_is_reported(tmp_path: Path):
    config_file = write_env(tmp_path, "WINDOW_EVICT_FROM_FRONT=TRUE\n")
    with pytest.raises(WindowConfigError, match="WINDOW_CAPACITY"):
        load_window_options(config_file)


@pytest.mark.parametrize("content", ["WINDOW_CAPACITY=ten\n", "WINDOW_CAPACITY=-4\n", "WINDOW_CAPACITY=4\nWINDOW_EVICT_FROM_FRONT=maybe\n"])
def test_invalid_window_options(tmp_path: Path, content: str):
    with pytest.raises(WindowConfigError):
        load_window_options(write_env(tmp_path, content))


def test_missing_file_is_reported(tmp_path: Path):
    with pytest.raises(WindowConfigError):
        check_config_valid(str(tmp_path / "missing.env"), required=[])


@pytest.mark.parametrize("content, expected", [("WINDOW_CAPACITY=3\n", 1.0), ("POLLING_INTERVAL_SECONDS=0.5\n", 0.5)])
def test_polling_interval(tmp_path: Path, content: str, expected: float):
    assert load_polling_interval(write_env(tmp_path, content)) == expected


@pytest.mark.parametrize("content", ["POLLING_INTERVAL_SECONDS=0\n", "POLLING_INTERVAL_SECONDS=fast\n"])
def test_invalid_polling_interval(tmp_path: Path, content: str):
    with pytest.raises(WindowConfigError):
        load_polling_interval(write_env(tmp_path, content))


def test_environment_takes_precedence_over_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WINDOW_CAPACITY", "7")
    config_file = write_env(tmp_path, "WINDOW_CAPACITY=3\nWINDOW_EVICT_FROM_FRONT=FALSE\n")
    assert load_window_options(config_file) == WindowOptions(capacity=7, evict_from_front=False)
