###########EXTERNAL IMPORTS############

#######################################

#############LOCAL IMPORTS#############

#######################################

##########     W I N D O W     E X C E P T I O N S     ##########


class EmptyWindowError(Exception):
    """Raised when min, median, max or a pop is requested on an empty window."""

    pass


class SlotOutOfRangeError(IndexError):
    """Raised when a logical position or physical slot does not address a live element."""

    pass


class WindowConfigError(ValueError):
    """Raised when a window or its configuration file holds an invalid option."""

    pass


class WindowModifiedError(RuntimeError):
    """Raised when an iterator or cursor is used after the window was mutated."""

    pass


##########     V A L I D A T I O N     E X C E P T I O N S     ##########


class WindowInvariantError(Exception):
    """
    Raised by the validation functions when the sorted chain, its endpoints
    or the median rank are inconsistent with the stored elements.
    """

    pass
