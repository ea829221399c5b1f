###########EXTERNAL IMPORTS############

from typing import Any, List

#######################################

#############LOCAL IMPORTS#############

from medianwindow.model.struct.ring_store import NO_SLOT
from medianwindow.model.struct.sorted_window import SortedWindow
from medianwindow.controller.exceptions import WindowInvariantError

#######################################


def validate_sorted_chain(window: SortedWindow[Any]) -> None:
    """
    Validates the sorted chain threaded through the window's ring store.

    Walks the chain from the minimum following `next` and from the maximum
    following `prev`, checking that every link is symmetric, that values never
    decrease, that the endpoints have no outer neighbour, and that the chain
    covers exactly the stored elements.

    Args:
        window (SortedWindow[Any]): The window to validate.

    Raises:
        WindowInvariantError: If any of the chain properties does not hold.
    """

    if window.count != window.nodes.size():
        raise WindowInvariantError(f"Window count {window.count} differs from ring store size {window.nodes.size()}")

    forward_slots: List[int] = []
    previous_slot = NO_SLOT
    slot = window.min_slot
    while slot != NO_SLOT:
        if len(forward_slots) >= window.count:
            raise WindowInvariantError("Sorted chain is longer than the element count (cycle or stale link)")
        if not window.nodes.is_live(slot):
            raise WindowInvariantError(f"Sorted chain references slot {slot} which holds no element")

        node = window.nodes.at_physical(slot)
        if node.prev != previous_slot:
            raise WindowInvariantError(f"Slot {slot} links back to {node.prev}, expected {previous_slot}")
        if previous_slot != NO_SLOT and window.less(node.value, window.nodes.at_physical(previous_slot).value):
            raise WindowInvariantError(f"Value at slot {slot} is smaller than its predecessor")

        forward_slots.append(slot)
        previous_slot = slot
        slot = node.next

    if len(forward_slots) != window.count:
        raise WindowInvariantError(f"Sorted chain holds {len(forward_slots)} nodes, expected {window.count}")

    if previous_slot != window.max_slot:
        raise WindowInvariantError(f"Chain ends at slot {previous_slot}, but the maximum is slot {window.max_slot}")

    backward_slots: List[int] = []
    slot = window.max_slot
    while slot != NO_SLOT and len(backward_slots) <= window.count:
        backward_slots.append(slot)
        slot = window.nodes.at_physical(slot).prev

    if backward_slots != forward_slots[::-1]:
        raise WindowInvariantError("Walking the chain from the maximum does not mirror the walk from the minimum")


def validate_median_rank(window: SortedWindow[Any]) -> None:
    """
    Validates that the median slot sits at rank (count - 1) // 2 of the chain.

    Raises:
        WindowInvariantError: If the stored rank or the median slot is wrong.
    """

    if window.count == 0:
        return

    expected_rank = (window.count - 1) // 2
    if window.median_rank != expected_rank:
        raise WindowInvariantError(f"Median rank is {window.median_rank}, expected {expected_rank} for {window.count} elements")

    slot = window.min_slot
    for _ in range(expected_rank):
        slot = window.nodes.at_physical(slot).next

    if slot != window.median_slot:
        raise WindowInvariantError(f"Median points to slot {window.median_slot}, but rank {expected_rank} is slot {slot}")


def validate_window(window: SortedWindow[Any]) -> None:
    """
    Runs every structural check on a window.

    An empty window must have all its slot references cleared; a non-empty one
    must pass both the chain and the median rank validation.

    Args:
        window (SortedWindow[Any]): The window to validate.

    Raises:
        WindowInvariantError: If the window is inconsistent.
    """

    if window.count == 0:
        references = (window.min_slot, window.max_slot, window.median_slot)
        if any(reference != NO_SLOT for reference in references):
            raise WindowInvariantError(f"Empty window still references slots {references}")
        if not window.nodes.empty():
            raise WindowInvariantError("Empty window still holds elements in its ring store")
        return

    if NO_SLOT in (window.min_slot, window.max_slot, window.median_slot):
        raise WindowInvariantError("Non-empty window is missing its min, max or median reference")

    validate_sorted_chain(window)
    validate_median_rank(window)
