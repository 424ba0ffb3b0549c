"""Implements a growable, contiguous byte vector.

The vector owns exactly one allocation (a bytearray or a NumPy ``uint8`` array) whose length
is the vector's capacity. The used portion grows by capacity doubling, can be shrunk explicitly,
and follows value semantics: copies are independent, moves transfer the allocation and leave
the source empty, and swaps exchange allocations.
"""

import logging

from bytevec import _config
from bytevec._errors import _bvec_assert
from bytevec._types import np

__all__ = ["ByteVector"]

logger: logging.Logger = logging.getLogger(__name__)


def _fill(
    storage: "np.ndarray[tuple[int], np.dtype[np.uint8]] | bytearray", start: int, stop: int
) -> None:
    """Overwrite ``storage[start:stop]`` with the debug fill byte."""
    if stop > start:
        memoryview(storage)[start:stop] = bytes((_config.FILL_BYTE,)) * (stop - start)


class ByteVector:
    """A growable byte buffer owning a single contiguous allocation.

    The allocation is None while the capacity is zero. Growth starts from
    ``DEFAULT_CAPACITY`` and doubles until the request fits; growth beyond ``max_size``,
    removing more bytes than are present and allocation failure raise
    :class:`~bytevec.InternalError`.
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview | None = None,
        size: int | None = None,
        use_numpy: bool = False,
        debug: bool | None = None,
        max_size: int | None = None,
    ) -> None:
        """Initialise the ByteVector.

        Args:
            data (bytes or bytearray or memoryview, optional): Initial contents. Defaults to None
                (an empty, unallocated vector).
            size (int, optional): Number of bytes of ``data`` to copy. Defaults to all of it.
            use_numpy (bool): If True, a NumPy array (np.uint8) is used as the allocation. If
                False, a bytearray is used. Defaults to False.
            debug (bool, optional): Enables the debug fill pattern and aliasing assertions.
                Defaults to the ``BYTEVEC_DEBUG`` environment setting.
            max_size (int, optional): Upper bound for the size and capacity of the vector.
                Defaults to ``SIZE_MAX`` (``sys.maxsize``).

        Raises:
            TypeError: If `use_numpy` or `debug` is not a boolean.
            ValueError: If `max_size` is not a positive integer.
        """
        if not isinstance(use_numpy, bool):
            raise TypeError("use_numpy must be a boolean.")
        if debug is not None and not isinstance(debug, bool):
            raise TypeError("debug must be a boolean.")
        if max_size is None:
            max_size = _config.SIZE_MAX
        if not isinstance(max_size, int) or isinstance(max_size, bool) or max_size <= 0:
            raise ValueError("max_size must be a positive integer.")

        self._use_numpy = use_numpy
        self._debug = _config.DEBUG if debug is None else debug
        self._max_size = max_size
        self._buffer: "np.ndarray[tuple[int], np.dtype[np.uint8]] | bytearray | None" = None
        self._size = 0

        if data is not None:
            self.push(data, size)

    @classmethod
    def from_bytes(
        cls, data: bytes | bytearray | memoryview | None, size: int | None = None, **kwargs
    ) -> "ByteVector":
        """Construct a vector holding a copy of ``data[:size]``.

        Args:
            data (bytes or bytearray or memoryview, optional): The bytes to copy. May be None
                only if `size` is zero.
            size (int, optional): Number of bytes to copy. Defaults to ``len(data)``.
            **kwargs: Forwarded to the constructor.

        Returns:
            ByteVector: The new vector.
        """
        vector = cls(**kwargs)
        vector.push(data, size)
        return vector

    @classmethod
    def from_vector(cls, src: "ByteVector", **kwargs) -> "ByteVector":
        """Construct a vector holding an independent copy of the bytes of ``src``.

        Args:
            src (ByteVector): The vector to copy. It is not modified.
            **kwargs: Forwarded to the constructor.

        Returns:
            ByteVector: The new vector.
        """
        vector = cls(**kwargs)
        vector.push_vector(src)
        return vector

    @classmethod
    def build_array(
        cls, size: int = 0, use_numpy: bool = False
    ) -> "np.ndarray[tuple[int], np.dtype[np.uint8]] | bytearray":
        """Builds a bytearray or NumPy array of the specified size.

        The contents of a NumPy array are left uninitialised.

        Args:
            size (int): The number of bytes to allocate. Defaults to 0.
            use_numpy (bool): If True, a NumPy array (np.uint8) is built. If False, a bytearray
                is built. Defaults to False.

        Returns:
            np.ndarray[tuple[int], np.dtype[np.uint8]] | bytearray: The created array.
        """
        return np.empty(size, dtype=np.uint8) if use_numpy else bytearray(size)

    def __len__(self) -> int:
        """Returns the logical size of the vector in bytes.

        Returns:
            int: The number of bytes in use.
        """
        return self._size

    def __str__(self) -> str:
        """Returns a string representation of the ByteVector instance.

        Returns:
            str: A string representation of the ByteVector instance.
        """
        storage_type = "ndarray" if self._use_numpy else "bytearray"
        return f"ByteVector(size={self._size}, capacity={self.capacity}, type={storage_type})"

    __repr__ = __str__

    def __bytes__(self) -> bytes:
        return self.data.tobytes()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteVector):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.data == memoryview(other).cast("B")
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> "ByteVector":
        return self.from_vector(
            self, use_numpy=self._use_numpy, debug=self._debug, max_size=self._max_size
        )

    def __deepcopy__(self, memo: dict) -> "ByteVector":
        return self.__copy__()

    @property
    def size(self) -> int:
        """The logical size of the vector in bytes."""
        return self._size

    @property
    def capacity(self) -> int:
        """The number of allocated bytes."""
        return 0 if self._buffer is None else len(self._buffer)

    @property
    def empty(self) -> bool:
        """Whether the logical size is zero."""
        return self._size == 0

    @property
    def max_size(self) -> int:
        """The upper bound for size and capacity."""
        return self._max_size

    @property
    def use_numpy(self) -> bool:
        """Whether the allocation is a NumPy array."""
        return self._use_numpy

    @property
    def debug(self) -> bool:
        """Whether debug fills and assertions are enabled."""
        return self._debug

    @property
    def data(self) -> memoryview:
        """Returns a writable memoryview of the used portion of the vector.

        The view aliases the allocation and is invalidated by the next reallocation.

        Returns:
            memoryview: A memoryview of the used bytes.
        """
        if self._buffer is None:
            return memoryview(bytearray())
        data: memoryview = (
            memoryview(self._buffer) if isinstance(self._buffer, bytearray) else self._buffer.data
        )
        return data[: self._size]

    @property
    def raw(self) -> memoryview:
        """Returns a writable memoryview of the whole allocation, unused tail included.

        Returns:
            memoryview: A memoryview of all ``capacity`` bytes.
        """
        if self._buffer is None:
            return memoryview(bytearray())
        return memoryview(self._buffer)

    def destroy(self) -> None:
        """Release the allocation and return the vector to the empty state."""
        if self._debug and self._buffer is not None:
            _fill(self._buffer, 0, len(self._buffer))
        self._buffer = None
        self._size = 0

    def clear(self) -> None:
        """Set the logical size to zero, keeping the allocation."""
        self._size = 0
        if self._debug and self._buffer is not None:
            _fill(self._buffer, 0, len(self._buffer))

    def clear_and_free(self) -> None:
        """Set the logical size to zero and release the allocation."""
        self.destroy()

    def copy_from(self, src: "ByteVector") -> None:
        """Replace the contents with an independent copy of ``src``.

        Copying a vector onto itself does nothing. The copy is built before the current
        allocation is released, so a fatal error leaves this vector unchanged.

        Args:
            src (ByteVector): The vector to copy. It is not modified.

        Raises:
            InternalError: If the copy would exceed this vector's ``max_size``.
        """
        if src is not self:
            copied = ByteVector(
                use_numpy=self._use_numpy, debug=self._debug, max_size=self._max_size
            )
            copied.push_vector(src)
            self.move_from(copied)

    def move_from(self, src: "ByteVector") -> None:
        """Take over the allocation of ``src`` and leave ``src`` empty.

        The storage type and ``max_size`` travel with the allocation. Moving a vector onto
        itself does nothing.

        Args:
            src (ByteVector): The vector to move from.
        """
        if src is not self:
            self.destroy()
            self._buffer, self._size = src._buffer, src._size
            self._use_numpy, self._max_size = src._use_numpy, src._max_size
            src._buffer = None
            src._size = 0

    def swap(self, other: "ByteVector") -> None:
        """Exchange allocations, sizes, storage types and size limits with ``other``.

        Args:
            other (ByteVector): The vector to swap with. May be ``self``.
        """
        self._buffer, other._buffer = other._buffer, self._buffer
        self._size, other._size = other._size, self._size
        self._use_numpy, other._use_numpy = other._use_numpy, self._use_numpy
        self._max_size, other._max_size = other._max_size, self._max_size

    def _realloc(self, capacity: int) -> None:
        """Move the used bytes into a new allocation of exactly ``capacity`` bytes.

        A capacity of zero frees the allocation.

        Args:
            capacity (int): The new capacity; must not be below the current size.

        Raises:
            InternalError: If a non-empty allocation cannot be made.
        """
        size = self._size
        if self._debug:
            _bvec_assert(capacity >= size, "reallocation below size")

        buffer = None
        if capacity:
            try:
                buffer = self.build_array(capacity, self._use_numpy)
            except MemoryError:
                buffer = None
            _bvec_assert(buffer is not None, "out of memory")
            if size:
                memoryview(buffer)[:size] = memoryview(self._buffer)[:size]
            if self._debug:
                _fill(buffer, size, capacity)

        logger.debug("Reallocated vector from %d to %d bytes", self.capacity, capacity)
        self._buffer = buffer

    def reserve(self, size: int) -> None:
        """Make the capacity at least ``size`` bytes without changing the logical size.

        The capacity starts from ``DEFAULT_CAPACITY`` and doubles until it is large enough.

        Args:
            size (int): The minimum capacity in bytes.

        Raises:
            InternalError: If doubling would exceed ``max_size``.
        """
        old_capacity = self.capacity

        new_capacity = old_capacity or min(_config.DEFAULT_CAPACITY, self._max_size)
        while new_capacity < size:
            _bvec_assert(new_capacity * 2 <= self._max_size, "integer overflow")
            new_capacity *= 2

        if new_capacity > old_capacity:
            self._realloc(new_capacity)

    def resize(self, size: int) -> None:
        """Set the logical size to ``size`` bytes.

        Growing exposes uninitialised bytes (the fill byte in debug mode). Shrinking keeps the
        capacity.

        Args:
            size (int): The new logical size.

        Raises:
            InternalError: If `size` is negative or growth exceeds ``max_size``.
        """
        _bvec_assert(size >= 0, "integer underflow")
        old_size = self._size
        if size > old_size:
            self.reserve(size)
            if self._debug:
                _fill(self._buffer, old_size, size)
        self._size = size

    def shrink(self) -> None:
        """Reduce the capacity by halving while at least twice the logical size remains.

        An empty vector releases its allocation.
        """
        size = self._size
        capacity = self.capacity
        while capacity and capacity // 2 >= size:
            capacity //= 2
        self._realloc(capacity)

    def push(self, data: bytes | bytearray | memoryview | None, size: int | None = None) -> None:
        """Append ``data[:size]`` to the vector.

        Args:
            data (bytes or bytearray or memoryview, optional): The bytes to append. Any object
                supporting the buffer protocol is accepted. May be None only if `size` is zero.
            size (int, optional): Number of bytes to append. Defaults to all of `data`.

        Raises:
            ValueError: If `size` is larger than `data`.
            InternalError: If the new size would exceed ``max_size``.
        """
        if data is None:
            if size:
                raise ValueError("data may only be None when size is zero.")
            return

        view = data if isinstance(data, memoryview) else memoryview(data)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
        if size is None:
            size = view.nbytes
        elif size > view.nbytes:
            raise ValueError("size exceeds the length of data.")
        if size == 0:
            return

        old_size = self._size
        new_size = old_size + size
        _bvec_assert(size > 0 and new_size <= self._max_size, "integer overflow")
        # the view keeps the source alive across a reallocation, so self-aliasing data is safe
        self.resize(new_size)
        memoryview(self._buffer)[old_size:new_size] = view[:size]

    def push_vector(self, src: "ByteVector") -> None:
        """Append the bytes of another vector.

        Args:
            src (ByteVector): The vector to append. Must not be ``self``.

        Raises:
            InternalError: In debug mode, if `src` is this vector.
        """
        if self._debug:
            _bvec_assert(src is not self, "vector appended to itself")
        self.push(src.data)

    def pop(self, size: int) -> None:
        """Remove ``size`` bytes from the end of the vector.

        Args:
            size (int): Number of bytes to remove.

        Raises:
            InternalError: If `size` is negative or larger than the logical size.
        """
        if size:
            _bvec_assert(0 < size <= self._size, "integer underflow")
            self.resize(self._size - size)
