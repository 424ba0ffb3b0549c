"""Typed element views over a byte vector.

A :class:`TypedView` treats the bytes of a :class:`~bytevec.ByteVector` as a contiguous array of
one fixed-size element type, described by a NumPy dtype. Every size handed to the vector is a
multiple of the element size; using one element type consistently per vector is up to the caller.
"""

from typing import Any

from bytevec._bytevector import ByteVector
from bytevec._types import _ElementType, np

__all__ = [
    "TypedView",
    "push_char",
    "push_int",
    "push_pointer",
    "push_unsigned",
    "push_wchar",
]


class TypedView:
    """An array-of-elements view of a :class:`~bytevec.ByteVector`.

    Indexing goes straight to NumPy over the used bytes; no further bounds checks are made.
    """

    def __init__(self, vector: ByteVector, dtype: _ElementType) -> None:
        """Initialise the TypedView.

        Args:
            vector (ByteVector): The vector whose bytes are viewed.
            dtype (DTypeLike): The element type, e.g. ``"<i4"`` or ``np.uint16``.

        Raises:
            TypeError: If `vector` is not a ByteVector.
            ValueError: If the element type has a size of zero.
        """
        if not isinstance(vector, ByteVector):
            raise TypeError("vector must be a ByteVector.")
        self._vector = vector
        self._dtype = np.dtype(dtype)
        self._itemsize = self._dtype.itemsize
        if self._itemsize == 0:
            raise ValueError("dtype must have a non-zero itemsize.")

    @classmethod
    def from_array(
        cls, data: Any, dtype: _ElementType, count: int | None = None, **kwargs
    ) -> "TypedView":
        """Construct a view over a new vector holding the first ``count`` elements of ``data``.

        Args:
            data (array_like): The elements to copy.
            dtype (DTypeLike): The element type.
            count (int, optional): Number of elements to copy. Defaults to all of them.
            **kwargs: Forwarded to the ByteVector constructor.

        Returns:
            TypedView: The view over the new vector.
        """
        view = cls(ByteVector(**kwargs), dtype)
        view.push_array(data, count)
        return view

    def __len__(self) -> int:
        return self._vector.size // self._itemsize

    def __getitem__(self, index: Any) -> Any:
        return self.data[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        self.data[index] = value

    def __str__(self) -> str:
        return f"{type(self).__name__}(dtype={self._dtype}, size={len(self)})"

    __repr__ = __str__

    @property
    def vector(self) -> ByteVector:
        """The underlying vector."""
        return self._vector

    @property
    def dtype(self) -> "np.dtype[Any]":
        """The element type."""
        return self._dtype

    @property
    def itemsize(self) -> int:
        """The size of one element in bytes."""
        return self._itemsize

    @property
    def size(self) -> int:
        """The number of elements in use."""
        return len(self)

    @property
    def data(self) -> "np.ndarray[tuple[int], np.dtype[Any]]":
        """Returns a NumPy array over the used elements.

        The array aliases the vector and is invalidated by its next reallocation.

        Returns:
            np.ndarray: A one-dimensional array of ``len(self)`` elements.
        """
        count = len(self)
        return np.frombuffer(self._vector.data, dtype=self._dtype, count=count)

    def _element_bytes(self, value: Any) -> bytes:
        element = np.array(value, dtype=self._dtype)
        if element.nbytes != self._itemsize:
            raise ValueError("value must be a single element.")
        return element.tobytes()

    def front(self) -> Any:
        """Returns the first element."""
        return self.data[0]

    def back(self) -> Any:
        """Returns the last element."""
        return self.data[-1]

    def push(self, value: Any) -> None:
        """Append one element.

        Args:
            value (Any): A value convertible to the element type.

        Raises:
            ValueError: If `value` does not convert to exactly one element.
        """
        self._vector.push(self._element_bytes(value))

    def pop(self) -> Any:
        """Remove the last element and return it.

        Returns:
            Any: The removed element.

        Raises:
            InternalError: If the view is empty.
        """
        count = len(self)
        value = self.data[count - 1].copy() if count else None
        self._vector.pop(self._itemsize)
        return value

    def push_array(self, data: Any, count: int | None = None) -> None:
        """Append the first ``count`` elements of ``data``.

        Args:
            data (array_like): The elements to append.
            count (int, optional): Number of elements to append. Defaults to all of them.

        Raises:
            ValueError: If `count` exceeds the number of elements in `data`.
        """
        elements = np.ascontiguousarray(data, dtype=self._dtype).reshape(-1)
        if count is None:
            count = elements.size
        elif count > elements.size:
            raise ValueError("count exceeds the number of elements in data.")
        self._vector.push(elements[:count].tobytes())

    def resize(self, count: int) -> None:
        """Set the number of elements; new elements are uninitialised.

        Args:
            count (int): The new element count.
        """
        self._vector.resize(count * self._itemsize)

    def reserve(self, count: int) -> None:
        """Make room for at least ``count`` elements without changing the size.

        Args:
            count (int): The minimum capacity in elements.
        """
        self._vector.reserve(count * self._itemsize)


def push_char(vector: ByteVector, value: int | bytes) -> None:
    """Append one byte.

    Args:
        vector (ByteVector): The destination vector.
        value (int or bytes): A byte value or a one-byte bytes object.
    """
    if isinstance(value, (bytes, bytearray)):
        value = value[0]
    TypedView(vector, np.uint8).push(value)


def push_wchar(vector: ByteVector, value: int | str) -> None:
    """Append one little-endian UTF-16 code unit.

    Args:
        vector (ByteVector): The destination vector.
        value (int or str): A code unit or a one-character string in the basic multilingual plane.
    """
    if isinstance(value, str):
        value = ord(value)
    TypedView(vector, "<u2").push(value)


def push_int(vector: ByteVector, value: int) -> None:
    """Append a little-endian signed 32-bit integer."""
    TypedView(vector, "<i4").push(value)


def push_unsigned(vector: ByteVector, value: int) -> None:
    """Append a little-endian unsigned 32-bit integer."""
    TypedView(vector, "<u4").push(value)


def push_pointer(vector: ByteVector, value: int) -> None:
    """Append a pointer-sized unsigned integer in native byte order."""
    TypedView(vector, np.uintp).push(value)
