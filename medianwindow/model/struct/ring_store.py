###########EXTERNAL IMPORTS############

from typing import TypeVar, Generic, List, Optional, Iterator

#######################################

#############LOCAL IMPORTS#############

from medianwindow.controller.exceptions import SlotOutOfRangeError, WindowConfigError
from medianwindow.util.debug import LoggerManager

#######################################

T = TypeVar("T")

NO_SLOT = -1  # Reserved slot number, never a valid physical index


class RingStore(Generic[T]):
    """
    Fixed-capacity circular buffer with stable physical slots.

    Elements are kept in insertion order and can be pushed or popped at both
    ends. Two addressing modes are exposed and must not be mixed:

    - Logical positions (`at`) count from the current front and shift whenever
      the front moves.
    - Physical slots (`at_physical`, returned by the push methods) name a raw
      storage location and keep pointing to the same element until that slot
      is overwritten by a later push or the store is resized.

    A capacity of zero is allowed; every push is then a no-op.

    Args:
        capacity (int): Maximum number of stored elements.
    """

    def __init__(self, capacity: int = 0) -> None:
        self.buffer: List[Optional[T]] = []
        self.front_offset: int = 0
        self.count: int = 0
        self.configure(capacity)

    def configure(self, capacity: int) -> None:
        """
        Resets the store to empty with the given capacity.

        Args:
            capacity (int): New capacity, zero or greater.

        Raises:
            WindowConfigError: If the capacity is negative.
        """

        if capacity < 0:
            raise WindowConfigError(f"Capacity must be zero or greater, got {capacity}")

        self.buffer = [None] * capacity
        self.front_offset = 0
        self.count = 0

    def clear(self) -> None:
        """
        Drops every element, keeping the current capacity.
        """

        self.configure(len(self.buffer))

    def resize(self, new_capacity: int, evict_from_front: bool = True) -> None:
        """
        Changes the capacity keeping the live elements in logical order.

        When shrinking, elements are evicted from the configured end until they
        fit, then the remaining ones are repacked starting at physical slot 0.
        When growing, storage is extended in place unless the live run wraps
        around the end of the buffer, in which case it is repacked as well.
        Physical slots obtained before a resize must be fetched again.

        Args:
            new_capacity (int): New capacity, zero or greater.
            evict_from_front (bool): Evict the oldest front elements when shrinking,
                otherwise evict from the back.

        Raises:
            WindowConfigError: If the new capacity is negative.
        """

        if new_capacity < 0:
            raise WindowConfigError(f"Capacity must be zero or greater, got {new_capacity}")

        old_capacity = len(self.buffer)
        if new_capacity == old_capacity:
            return

        logger = LoggerManager.get_logger(__name__)

        if new_capacity < old_capacity:
            evicted = 0
            while self.count > new_capacity:
                if evict_from_front:
                    self.pop_front()
                else:
                    self.pop_back()
                evicted += 1

            if self.front_offset != 0:
                self.__repack()
            del self.buffer[new_capacity:]
            logger.debug(f"Ring store shrunk from {old_capacity} to {new_capacity} slots, {evicted} evicted")
        else:
            if self.front_offset + self.count > old_capacity:
                self.__repack()
            self.buffer.extend([None] * (new_capacity - old_capacity))
            logger.debug(f"Ring store grown from {old_capacity} to {new_capacity} slots")

    def __repack(self) -> None:
        """
        Moves the live elements to slots 0..count-1 in logical order.
        """

        items = [self.at(position) for position in range(self.count)]
        self.buffer = items + [None] * (len(self.buffer) - self.count)
        self.front_offset = 0

    def push_back(self, value: T) -> int:
        """
        Appends a value after the current back, evicting the front element when full.

        Args:
            value (T): Value to store.

        Returns:
            int: Physical slot of the new element, or NO_SLOT if the capacity is zero.
        """

        capacity = len(self.buffer)
        if capacity == 0:
            return NO_SLOT

        while self.count >= capacity:
            self.pop_front()

        slot = (self.front_offset + self.count) % capacity
        self.buffer[slot] = value
        self.count += 1
        return slot

    def push_front(self, value: T) -> int:
        """
        Prepends a value before the current front, evicting the back element when full.

        Args:
            value (T): Value to store.

        Returns:
            int: Physical slot of the new element, or NO_SLOT if the capacity is zero.
        """

        capacity = len(self.buffer)
        if capacity == 0:
            return NO_SLOT

        while self.count >= capacity:
            self.pop_back()

        self.front_offset = (self.front_offset - 1) % capacity
        self.buffer[self.front_offset] = value
        self.count += 1
        return self.front_offset

    def pop_front(self) -> Optional[T]:
        """
        Removes and returns the front element, or None if the store is empty.
        """

        if self.count == 0:
            return None

        slot = self.front_offset
        value = self.buffer[slot]
        self.buffer[slot] = None
        self.front_offset = (self.front_offset + 1) % len(self.buffer)
        self.count -= 1
        return value

    def pop_back(self) -> Optional[T]:
        """
        Removes and returns the back element, or None if the store is empty.
        """

        if self.count == 0:
            return None

        slot = self.back_index()
        value = self.buffer[slot]
        self.buffer[slot] = None
        self.count -= 1
        return value

    def at(self, position: int) -> T:
        """
        Returns the element at a logical position counted from the front.

        Args:
            position (int): Logical offset, 0 being the front.

        Returns:
            T: The stored element.

        Raises:
            SlotOutOfRangeError: If the position is not below the element count.
        """

        if position < 0 or position >= self.count:
            raise SlotOutOfRangeError(f"Logical position {position} is out of range for {self.count} elements")

        return self.buffer[(self.front_offset + position) % len(self.buffer)]  # type: ignore[return-value]

    def at_physical(self, slot: int) -> T:
        """
        Returns the element stored in a physical slot.

        Args:
            slot (int): Physical slot previously returned by a push.

        Returns:
            T: The stored element.

        Raises:
            SlotOutOfRangeError: If the slot does not hold a live element.
        """

        if not self.is_live(slot):
            raise SlotOutOfRangeError(f"Physical slot {slot} does not hold a live element")

        return self.buffer[slot]  # type: ignore[return-value]

    def is_live(self, slot: int) -> bool:
        """
        Checks whether a physical slot currently holds an element.
        """

        capacity = len(self.buffer)
        if slot < 0 or slot >= capacity:
            return False
        return (slot - self.front_offset) % capacity < self.count

    def front(self) -> T:
        return self.at_physical(self.front_index())

    def back(self) -> T:
        return self.at_physical(self.back_index())

    def front_index(self) -> int:
        """
        Returns the physical slot of the front element.

        Raises:
            SlotOutOfRangeError: If the store is empty.
        """

        if self.count == 0:
            raise SlotOutOfRangeError("Ring store is empty")
        return self.front_offset

    def back_index(self) -> int:
        """
        Returns the physical slot of the back element.

        Raises:
            SlotOutOfRangeError: If the store is empty.
        """

        if self.count == 0:
            raise SlotOutOfRangeError("Ring store is empty")
        return (self.front_offset + self.count - 1) % len(self.buffer)

    def size(self) -> int:
        return self.count

    def max_size(self) -> int:
        return len(self.buffer)

    def empty(self) -> bool:
        return self.count == 0

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[T]:
        """
        Iterates from front to back in insertion order.
        """

        for position in range(self.count):
            yield self.at(position)
