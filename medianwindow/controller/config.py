###########EXTERNAL IMPORTS############

from typing import Iterable
from dotenv import load_dotenv
import os

#######################################

#############LOCAL IMPORTS#############

from medianwindow.model.window import WindowOptions
from medianwindow.controller.exceptions import WindowConfigError
import medianwindow.util.functions.objects as objects

#######################################

DEFAULT_POLLING_INTERVAL_SECONDS = 1.0


def check_config_valid(config_file: str, required: Iterable[str]) -> None:
    """
    Loads the environment file and validates that the required settings are present.

    Variables already present in the environment take precedence over the file.

    Args:
        config_file (str): Path to the .env config file.
        required (Iterable[str]): Names of the settings that must be defined.

    Raises:
        WindowConfigError: If the file does not exist or any required setting is missing.
    """

    if not os.path.isfile(config_file):
        raise WindowConfigError(f"Config file {config_file} does not exist")

    load_dotenv(config_file)
    missing = [var for var in required if os.getenv(var) is None]
    if missing:
        raise WindowConfigError(f"Missing required window config(s): {', '.join(missing)}")


def load_window_options(config_file: str) -> WindowOptions:
    """
    Reads the window capacity settings from a .env file.

    Settings:
        WINDOW_CAPACITY: Non-negative integer, required.
        WINDOW_EVICT_FROM_FRONT: TRUE or FALSE, defaults to TRUE.

    Args:
        config_file (str): Path to the .env config file.

    Returns:
        WindowOptions: The parsed options.

    Raises:
        WindowConfigError: If a setting is missing or not valid.
    """

    check_config_valid(config_file, required=["WINDOW_CAPACITY"])

    raw_capacity = objects.require_env_variable("WINDOW_CAPACITY")
    try:
        capacity = int(raw_capacity)
    except ValueError:
        raise WindowConfigError(f"WINDOW_CAPACITY must be an integer, got '{raw_capacity}'")
    if capacity < 0:
        raise WindowConfigError(f"WINDOW_CAPACITY must be zero or greater, got {capacity}")

    raw_evict = os.getenv("WINDOW_EVICT_FROM_FRONT")
    if raw_evict is None:
        evict_from_front = True
    elif raw_evict.strip().upper() in ("TRUE", "FALSE"):
        evict_from_front = objects.check_bool_str(raw_evict)
    else:
        raise WindowConfigError(f"WINDOW_EVICT_FROM_FRONT must be TRUE or FALSE, got '{raw_evict}'")

    return WindowOptions(capacity=capacity, evict_from_front=evict_from_front)


def load_polling_interval(config_file: str) -> float:
    """
    Reads POLLING_INTERVAL_SECONDS from a .env file (positive number, defaults to 1 second).

    Raises:
        WindowConfigError: If the value is not a positive number.
    """

    check_config_valid(config_file, required=[])

    raw_interval = os.getenv("POLLING_INTERVAL_SECONDS")
    if raw_interval is None:
        return DEFAULT_POLLING_INTERVAL_SECONDS

    try:
        interval = float(raw_interval)
    except ValueError:
        raise WindowConfigError(f"POLLING_INTERVAL_SECONDS must be a number, got '{raw_interval}'")
    if interval <= 0:
        raise WindowConfigError(f"POLLING_INTERVAL_SECONDS must be greater than zero, got {interval}")

    return interval
