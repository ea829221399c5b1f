###########EXTERNAL IMPORTS############

from dataclasses import dataclass
from typing import TypeVar, Generic, Callable, Optional, Iterator, List, Any
import operator

#######################################

#############LOCAL IMPORTS#############

from medianwindow.model.struct.ring_store import RingStore, NO_SLOT
from medianwindow.model.window import WindowStatistics
from medianwindow.controller.exceptions import (
    EmptyWindowError,
    SlotOutOfRangeError,
    WindowConfigError,
    WindowModifiedError,
)
from medianwindow.util.debug import LoggerManager

#######################################

T = TypeVar("T")

LessFunction = Callable[[Any, Any], bool]
KeyFunction = Callable[[Any], Any]


@dataclass
class WindowNode(Generic[T]):
    """
    Ring store record threading one value into the sorted chain.

    Attributes:
        value: The stored element.
        prev: Physical slot of the next smaller element, or NO_SLOT at the minimum.
        next: Physical slot of the next larger element, or NO_SLOT at the maximum.
    """

    value: T
    prev: int = NO_SLOT
    next: int = NO_SLOT


class SortedWindow(Generic[T]):
    """
    Fixed-capacity sliding window with constant-time min, median and max.

    Elements are stored in a `RingStore` in insertion order, which decides
    eviction. A doubly linked list expressed with physical slots is threaded
    through the stored nodes and keeps them in ascending order, while the
    minimum, maximum and median slots are maintained incrementally.

    Inserting walks the chain starting at the median, so its cost is the
    distance between the median and the insertion point. Popping an element
    that differs from the median is O(1); popping one equal to the median
    walks the run of equal elements, up to O(n) when most of the window holds
    the same value.

    The median is the lower median, the element at sorted rank (size - 1) // 2.
    Equal elements keep their insertion order in the chain.

    Args:
        capacity (int): Maximum number of retained elements (zero disables the window).
        less (Optional[LessFunction]): Strict ordering predicate, natural ``<`` by default.
        key (Optional[KeyFunction]): Orders elements by ``key(element)`` instead of a predicate.

    Raises:
        WindowConfigError: If the capacity is negative or both less and key are given.
    """

    def __init__(self, capacity: int = 0, less: Optional[LessFunction] = None, key: Optional[KeyFunction] = None) -> None:
        self.nodes: RingStore[WindowNode[T]] = RingStore()
        self.less: LessFunction = SortedWindow.build_less(less, key)
        self.count: int = 0
        self.min_slot: int = NO_SLOT
        self.max_slot: int = NO_SLOT
        self.median_slot: int = NO_SLOT
        self.median_rank: int = 0
        self.version: int = 0
        self.nodes.configure(capacity)

    @staticmethod
    def build_less(less: Optional[LessFunction], key: Optional[KeyFunction]) -> LessFunction:
        """
        Resolves the ordering predicate from the constructor arguments.

        Raises:
            WindowConfigError: If both a predicate and a key function are given.
        """

        if less is not None and key is not None:
            raise WindowConfigError("Specify either an ordering predicate or a key function, not both")
        if less is not None:
            return less
        if key is not None:
            return lambda left, right: key(left) < key(right)
        return operator.lt

    def configure(self, capacity: int, less: Optional[LessFunction] = None, key: Optional[KeyFunction] = None) -> None:
        """
        Resets the window to empty with a new capacity.

        The ordering is replaced only when a predicate or key function is given.

        Args:
            capacity (int): New maximum number of elements.
            less (Optional[LessFunction]): New ordering predicate.
            key (Optional[KeyFunction]): New key function.
        """

        self.nodes.configure(capacity)
        if less is not None or key is not None:
            self.less = SortedWindow.build_less(less, key)
        self.__reset_chain()

    def __reset_chain(self) -> None:
        self.count = 0
        self.min_slot = NO_SLOT
        self.max_slot = NO_SLOT
        self.median_slot = NO_SLOT
        self.median_rank = 0
        self.version += 1

    def set_max_size(self, max_size: int, evict_from_front: bool = True) -> None:
        """
        Changes the capacity, rebuilding the chain from the retained elements.

        The current elements are drained in insertion order, the store is
        reconfigured and the retained ones are pushed back one by one, so the
        ordering and median invariants hold by construction.

        Args:
            max_size (int): New capacity, zero or greater.
            evict_from_front (bool): When shrinking, keep the newest elements (True)
                or the oldest ones (False).

        Raises:
            WindowConfigError: If the capacity is negative.
        """

        if max_size < 0:
            raise WindowConfigError(f"Capacity must be zero or greater, got {max_size}")

        old_capacity = self.nodes.max_size()
        if max_size == old_capacity:
            return

        retained = [node.value for node in self.nodes]
        if len(retained) > max_size:
            retained = retained[len(retained) - max_size :] if evict_from_front else retained[:max_size]

        self.nodes.configure(max_size)
        self.__reset_chain()
        for value in retained:
            self.push_back(value)

        logger = LoggerManager.get_logger(__name__)
        logger.debug(f"Window capacity changed from {old_capacity} to {max_size}, {len(retained)} elements retained")

    def clear(self) -> None:
        """
        Drops every element, keeping the capacity and the ordering.
        """

        self.nodes.clear()
        self.__reset_chain()

    def push_back(self, value: T) -> None:
        """
        Adds a value as the newest element, evicting the oldest one (front) when full.
        """

        capacity = self.nodes.max_size()
        if capacity == 0:
            return

        while self.count >= capacity:
            self.pop_front()

        slot = self.nodes.push_back(WindowNode(value))
        self.__link(slot)

    def push_front(self, value: T) -> None:
        """
        Adds a value at the front of the insertion order, evicting the back element when full.
        """

        capacity = self.nodes.max_size()
        if capacity == 0:
            return

        while self.count >= capacity:
            self.pop_back()

        slot = self.nodes.push_front(WindowNode(value))
        self.__link(slot)

    def pop_front(self) -> T:
        """
        Removes and returns the front element of the insertion order.

        Raises:
            EmptyWindowError: If the window is empty.
        """

        if self.count == 0:
            raise EmptyWindowError("Cannot pop from an empty window")

        self.__unlink(self.nodes.front_index())
        node = self.nodes.pop_front()
        assert node is not None
        return node.value

    def pop_back(self) -> T:
        """
        Removes and returns the back element of the insertion order.

        Raises:
            EmptyWindowError: If the window is empty.
        """

        if self.count == 0:
            raise EmptyWindowError("Cannot pop from an empty window")

        self.__unlink(self.nodes.back_index())
        node = self.nodes.pop_back()
        assert node is not None
        return node.value

    def __link(self, slot: int) -> None:
        """
        Splices the node stored at `slot` into the sorted chain.

        The search starts at the median: smaller values walk toward the minimum
        until a node not greater than the value is found, other values walk
        toward the maximum until a strictly greater node is found. Either way
        the new node lands after every element equal to it.
        """

        self.version += 1
        node = self.nodes.at_physical(slot)

        if self.count == 0:
            self.min_slot = slot
            self.max_slot = slot
            self.median_slot = slot
            self.median_rank = 0
            self.count = 1
            return

        median_node = self.nodes.at_physical(self.median_slot)

        if self.less(node.value, median_node.value):
            self.median_rank += 1
            after_slot = self.median_slot
            before_slot = median_node.prev
            while before_slot != NO_SLOT:
                carriage = self.nodes.at_physical(before_slot)
                if not self.less(node.value, carriage.value):
                    break
                after_slot = before_slot
                before_slot = carriage.prev
        else:
            before_slot = self.median_slot
            after_slot = median_node.next
            while after_slot != NO_SLOT:
                carriage = self.nodes.at_physical(after_slot)
                if self.less(node.value, carriage.value):
                    break
                before_slot = after_slot
                after_slot = carriage.next

        node.prev = before_slot
        node.next = after_slot
        if before_slot == NO_SLOT:
            self.min_slot = slot
        else:
            self.nodes.at_physical(before_slot).next = slot
        if after_slot == NO_SLOT:
            self.max_slot = slot
        else:
            self.nodes.at_physical(after_slot).prev = slot

        self.count += 1
        self.__rebalance_median()

    def __unlink(self, slot: int) -> None:
        """
        Removes the node stored at `slot` from the sorted chain.

        The node itself stays in the ring store; the caller pops it afterwards.
        """

        self.version += 1
        node = self.nodes.at_physical(slot)

        if node.prev != NO_SLOT:
            self.nodes.at_physical(node.prev).next = node.next
        else:
            self.min_slot = node.next

        if node.next != NO_SLOT:
            self.nodes.at_physical(node.next).prev = node.prev
        else:
            self.max_slot = node.prev

        self.count -= 1
        if self.count == 0:
            self.median_slot = NO_SLOT
            self.median_rank = 0
            return

        if slot == self.median_slot:
            if node.prev != NO_SLOT:
                self.median_slot = node.prev
                self.median_rank -= 1
            else:
                self.median_slot = node.next
        elif self.__precedes_median(node):
            self.median_rank -= 1

        self.__rebalance_median()

    def __precedes_median(self, node: WindowNode[T]) -> bool:
        """
        Tells whether an unlinked node was placed before the median in the chain.

        Nodes equal to the median are resolved by walking their run of equal
        elements; the unlinked node still holds its former successor.
        """

        median_value = self.nodes.at_physical(self.median_slot).value
        if self.less(node.value, median_value):
            return True
        if self.less(median_value, node.value):
            return False

        carriage_slot = node.next
        while carriage_slot != NO_SLOT:
            if carriage_slot == self.median_slot:
                return True
            carriage = self.nodes.at_physical(carriage_slot)
            if self.less(node.value, carriage.value):
                return False
            carriage_slot = carriage.next
        return False

    def __rebalance_median(self) -> None:
        """
        Walks the median one link at a time until it sits at rank (count - 1) // 2.
        """

        target_rank = (self.count - 1) // 2
        while self.median_rank > target_rank:
            self.median_slot = self.nodes.at_physical(self.median_slot).prev
            self.median_rank -= 1
        while self.median_rank < target_rank:
            self.median_slot = self.nodes.at_physical(self.median_slot).next
            self.median_rank += 1

    def min(self) -> T:
        """
        Returns the smallest element.

        Raises:
            EmptyWindowError: If the window is empty.
        """

        if self.count == 0:
            raise EmptyWindowError("Cannot get the minimum of an empty window")
        return self.nodes.at_physical(self.min_slot).value

    def median(self) -> T:
        """
        Returns the lower median, the element at sorted rank (size - 1) // 2.

        Raises:
            EmptyWindowError: If the window is empty.
        """

        if self.count == 0:
            raise EmptyWindowError("Cannot get the median of an empty window")
        return self.nodes.at_physical(self.median_slot).value

    def max(self) -> T:
        """
        Returns the largest element.

        Raises:
            EmptyWindowError: If the window is empty.
        """

        if self.count == 0:
            raise EmptyWindowError("Cannot get the maximum of an empty window")
        return self.nodes.at_physical(self.max_slot).value

    def size(self) -> int:
        return self.count

    def max_size(self) -> int:
        return self.nodes.max_size()

    def empty(self) -> bool:
        return self.count == 0

    def get_statistics(self) -> WindowStatistics:
        """
        Returns a snapshot of the current order statistics.

        Returns:
            WindowStatistics: Size, capacity and min/median/max (None when empty).
        """

        if self.count == 0:
            return WindowStatistics(size=0, capacity=self.max_size())

        return WindowStatistics(
            size=self.count,
            capacity=self.max_size(),
            min_value=self.min(),
            median_value=self.median(),
            max_value=self.max(),
        )

    ###############     T R A V E R S A L     ###############

    def __walk(self, slot: int, forward: bool, version: int) -> Iterator[T]:
        while True:
            if self.version != version:
                raise WindowModifiedError("Window was modified during iteration")
            if slot == NO_SLOT:
                return
            node = self.nodes.at_physical(slot)
            yield node.value
            slot = node.next if forward else node.prev

    def __iter__(self) -> Iterator[T]:
        """
        Iterates from the minimum to the maximum.
        """

        return self.__walk(self.min_slot, forward=True, version=self.version)

    def __reversed__(self) -> Iterator[T]:
        """
        Iterates from the maximum to the minimum.
        """

        return self.__walk(self.max_slot, forward=False, version=self.version)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"SortedWindow({self.to_list()!r}, capacity={self.max_size()})"

    def to_list(self) -> List[T]:
        return list(self)

    def cursor_min(self) -> "WindowCursor[T]":
        return WindowCursor(self, self.min_slot)

    def cursor_max(self) -> "WindowCursor[T]":
        return WindowCursor(self, self.max_slot)

    def cursor_median(self) -> "WindowCursor[T]":
        return WindowCursor(self, self.median_slot)

    def cursor_end(self) -> "WindowCursor[T]":
        return WindowCursor(self, NO_SLOT)


class WindowCursor(Generic[T]):
    """
    Bidirectional read-only position in a window's sorted chain.

    A cursor either sits on a node or past the end (``at_end``). Advancing
    from the maximum or retreating from the minimum moves past the end, and
    retreating from past the end moves to the maximum. Any mutation of the
    window invalidates the cursor.

    Args:
        window (SortedWindow[T]): The traversed window.
        slot (int): Physical slot of the starting node, or NO_SLOT for past the end.
    """

    def __init__(self, window: SortedWindow[T], slot: int) -> None:
        self.window = window
        self.slot = slot
        self.version = window.version

    def __require_valid(self) -> None:
        if self.version != self.window.version:
            raise WindowModifiedError("Window was modified after the cursor was created")

    def __require_node(self) -> WindowNode[T]:
        self.__require_valid()
        if self.slot == NO_SLOT:
            raise SlotOutOfRangeError("Cursor is past the end of the window")
        return self.window.nodes.at_physical(self.slot)

    @property
    def at_end(self) -> bool:
        return self.slot == NO_SLOT

    @property
    def value(self) -> T:
        return self.__require_node().value

    @property
    def is_median(self) -> bool:
        self.__require_valid()
        return self.slot != NO_SLOT and self.slot == self.window.median_slot

    def advance(self) -> "WindowCursor[T]":
        """
        Moves to the next larger element.

        Raises:
            SlotOutOfRangeError: If the cursor is already past the end.
            WindowModifiedError: If the window changed since the cursor was created.
        """

        self.slot = self.__require_node().next
        return self

    def retreat(self) -> "WindowCursor[T]":
        """
        Moves to the next smaller element, or to the maximum when past the end.

        Raises:
            SlotOutOfRangeError: If the cursor is past the end of an empty window.
            WindowModifiedError: If the window changed since the cursor was created.
        """

        self.__require_valid()
        if self.slot == NO_SLOT:
            if self.window.max_slot == NO_SLOT:
                raise SlotOutOfRangeError("Cannot retreat in an empty window")
            self.slot = self.window.max_slot
        else:
            self.slot = self.window.nodes.at_physical(self.slot).prev
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WindowCursor):
            return NotImplemented
        return self.window is other.window and self.slot == other.slot

    def __repr__(self) -> str:
        return f"WindowCursor(slot={self.slot})"
