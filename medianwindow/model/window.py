###########EXTERNAL IMPORTS############

from dataclasses import dataclass
from typing import Dict, Any, Optional

#######################################

#############LOCAL IMPORTS#############

#######################################


@dataclass
class WindowOptions:
    """
    Capacity settings for a sorted window.

    Attributes:
        capacity: Maximum number of retained elements (zero disables the window).
        evict_from_front: When shrinking, drop the oldest elements (True) or the newest ones (False).
    """

    capacity: int
    evict_from_front: bool = True


@dataclass
class WindowStatistics:
    """
    Point-in-time snapshot of a sorted window's order statistics.

    The value fields are None when the window is empty, so a snapshot can be
    taken at any time without handling the empty-window error.

    Attributes:
        size: Number of retained elements.
        capacity: Configured maximum number of elements.
        min_value: Smallest retained element.
        median_value: Lower median of the retained elements.
        max_value: Largest retained element.
    """

    size: int = 0
    capacity: int = 0
    min_value: Optional[Any] = None
    median_value: Optional[Any] = None
    max_value: Optional[Any] = None

    def get_data(self) -> Dict[str, Any]:
        """
        Returns the snapshot as a serialization-friendly dictionary.
        """

        return {
            "size": self.size,
            "capacity": self.capacity,
            "min_value": self.min_value,
            "median_value": self.median_value,
            "max_value": self.max_value,
        }
