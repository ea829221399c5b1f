###########EXTERNAL IMPORTS############

from typing import Optional
import psutil

#######################################

#############LOCAL IMPORTS#############

#######################################


def get_cpu_usage_percentage(interval: Optional[float] = None) -> float:
    """
    Retrieves the current CPU usage percentage of the system.

    Args:
        interval: Seconds to block while measuring, or None to compare against the previous call.

    Returns:
        Overall CPU usage percentage (0-100).
    """

    return float(psutil.cpu_percent(interval))


def get_ram_usage_percentage() -> float:
    """
    Retrieves the current RAM usage of the system as a percentage of the total.
    """

    virtual_memory = psutil.virtual_memory()
    return (virtual_memory.used / virtual_memory.total) * 100
