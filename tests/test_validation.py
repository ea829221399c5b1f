###########EXTERNAL IMPORTS############

import pytest

#######################################

#############LOCAL IMPORTS#############

from medianwindow.model.struct.ring_store import NO_SLOT
from medianwindow.model.struct.sorted_window import SortedWindow
from medianwindow.controller.exceptions import WindowInvariantError
from medianwindow.controller.validation import validate_sorted_chain, validate_median_rank, validate_window

#######################################


@pytest.fixture
def window() -> SortedWindow[int]:
    window: SortedWindow[int] = SortedWindow(5)
    for value in (40, 10, 30, 20, 50):
        window.push_back(value)
    return window


def test_healthy_window_passes(window: SortedWindow[int]):
    validate_sorted_chain(window)
    validate_median_rank(window)
    validate_window(window)
    validate_window(SortedWindow(3))


def test_unsorted_value_is_detected(window: SortedWindow[int]):
    window.nodes.at_physical(window.min_slot).value = 1000
    with pytest.raises(WindowInvariantError):
        validate_sorted_chain(window)


def test_asymmetric_link_is_detected(window: SortedWindow[int]):
    second_slot = window.nodes.at_physical(window.min_slot).next
    window.nodes.at_physical(second_slot).prev = NO_SLOT
    with pytest.raises(WindowInvariantError):
        validate_sorted_chain(window)


def test_wrong_maximum_is_detected(window: SortedWindow[int]):
    window.max_slot = window.min_slot
    with pytest.raises(WindowInvariantError):
        validate_window(window)


def test_count_mismatch_is_detected(window: SortedWindow[int]):
    window.count += 1
    with pytest.raises(WindowInvariantError):
        validate_sorted_chain(window)


def test_wrong_median_rank_is_detected(window: SortedWindow[int]):
    window.median_rank += 1
    with pytest.raises(WindowInvariantError):
        validate_median_rank(window)


def test_wrong_median_slot_is_detected(window: SortedWindow[int]):
    window.median_slot = window.max_slot
    with pytest.raises(WindowInvariantError):
        validate_median_rank(window)


def test_empty_window_with_stale_reference_is_detected():
    window: SortedWindow[int] = SortedWindow(3)
    window.median_slot = 0
    with pytest.raises(WindowInvariantError):
        validate_window(window)
