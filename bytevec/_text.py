"""Null-terminated string building on top of a byte vector.

:class:`CharView` stores narrow strings (``bytes``, one byte per character) and
:class:`WideCharView` stores wide strings (``str``, little-endian UTF-16 code units). Both keep
at most one trailing terminator and share the same contract; only the element type differs.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from bytevec._bytevector import ByteVector
from bytevec._typed import TypedView
from bytevec._types import np

__all__ = ["CharView", "WideCharView"]

_T = TypeVar("_T", bytes, str)


def _strlen(elements: "np.ndarray[tuple[int], np.dtype[Any]]") -> int:
    """Returns the index of the first terminator, or the length if there is none."""
    zeros = np.flatnonzero(elements == 0)
    return int(zeros[0]) if zeros.size else len(elements)


def _terminated(
    elements: "np.ndarray[tuple[int], np.dtype[Any]]", length: int
) -> "np.ndarray[tuple[int], np.dtype[Any]]":
    """Returns the first ``length`` elements followed by a terminator."""
    return np.concatenate((elements[:length], np.zeros(1, dtype=elements.dtype)))


class _TextView(TypedView, ABC, Generic[_T]):
    """Base class of the narrow and wide string views.

    The view's string is only well defined once a trailing terminator is present, which
    :meth:`getstr` guarantees.
    """

    _ELEMENT_TYPE: ClassVar[str]

    def __init__(self, vector: ByteVector | None = None) -> None:
        """Initialise the view.

        Args:
            vector (ByteVector, optional): The vector to build the string in. Defaults to a
                new, empty vector.
        """
        super().__init__(ByteVector() if vector is None else vector, self._ELEMENT_TYPE)

    @classmethod
    def from_string(cls, text: _T, **kwargs) -> "_TextView[_T]":
        """Construct a view over a new vector holding ``text`` and its terminator.

        Args:
            text (bytes or str): The initial string; it ends at its first terminator, if any.
            **kwargs: Forwarded to the ByteVector constructor.

        Returns:
            The view over the new vector.
        """
        view = cls(ByteVector(**kwargs))
        elements = view._encode(text)
        view.push_array(_terminated(elements, _strlen(elements)))
        return view

    @abstractmethod
    def _encode(self, text: _T) -> "np.ndarray[tuple[int], np.dtype[Any]]":
        """Convert a string to an array of elements."""
        pass

    @abstractmethod
    def _decode(self, elements: "np.ndarray[tuple[int], np.dtype[Any]]") -> _T:
        """Convert an array of elements to a string."""
        pass

    def _drop_terminator(self) -> None:
        if len(self) and self.back() == 0:
            self.pop()

    def getstr(self) -> _T:
        """Ensure a trailing terminator and return the string.

        At most one terminator is ever added, however often this is called.

        Returns:
            bytes or str: The elements up to the first terminator.
        """
        if not len(self) or self.back() != 0:
            self.push(0)
        data = self.data
        return self._decode(data[: _strlen(data)])

    def strshrink(self) -> None:
        """Cut the vector just past the first terminator and shrink its capacity.

        Used after writing a terminator into the middle of the string.
        """
        length = _strlen(self.data)
        self.resize(length + 1)
        self[length] = 0
        self._vector.shrink()

    def strcat(self, text: _T) -> None:
        """Append ``text``, replacing the current trailing terminator.

        Args:
            text (bytes or str): The string to append; it ends at its first terminator, if any.
        """
        self._drop_terminator()
        elements = self._encode(text)
        self.push_array(_terminated(elements, _strlen(elements)))

    def strncat(self, text: _T, n: int) -> None:
        """Append at most ``n`` characters of ``text`` followed by exactly one terminator.

        Args:
            text (bytes or str): The string to append from.
            n (int): The maximum number of characters to copy.
        """
        self._drop_terminator()
        elements = self._encode(text)
        length = min(n, _strlen(elements))
        self.push_array(_terminated(elements, length))

    @abstractmethod
    def pushback(self, char: Any) -> None:
        """Append a single character; see :meth:`strcat`."""
        pass

    def detach(self) -> _T:
        """Return the string and release the vector's allocation.

        Returns:
            bytes or str: The string held by the vector.
        """
        text = self.getstr()
        self._vector.destroy()
        return text


class CharView(_TextView[bytes]):
    """Narrow, byte-per-character string view."""

    _ELEMENT_TYPE = "u1"

    def _encode(self, text: bytes) -> "np.ndarray[tuple[int], np.dtype[np.uint8]]":
        if isinstance(text, str):
            raise TypeError("narrow strings must be bytes, not str.")
        return np.frombuffer(bytes(text), dtype=np.uint8)

    def _decode(self, elements: "np.ndarray[tuple[int], np.dtype[np.uint8]]") -> bytes:
        return elements.tobytes()

    def pushback(self, char: int | bytes) -> None:
        """Append a single character.

        Args:
            char (int or bytes): A byte value or a one-byte bytes object.
        """
        self.strcat(bytes((char,)) if isinstance(char, int) else bytes(char[:1]))


class WideCharView(_TextView[str]):
    """Wide string view storing little-endian UTF-16 code units."""

    _ELEMENT_TYPE = "<u2"

    def _encode(self, text: str) -> "np.ndarray[tuple[int], np.dtype[np.uint16]]":
        if not isinstance(text, str):
            raise TypeError("wide strings must be str.")
        return np.frombuffer(text.encode("utf-16-le", "surrogatepass"), dtype="<u2")

    def _decode(self, elements: "np.ndarray[tuple[int], np.dtype[np.uint16]]") -> str:
        return elements.astype("<u2").tobytes().decode("utf-16-le", "surrogatepass")

    def pushback(self, char: int | str) -> None:
        """Append a single character.

        Args:
            char (int or str): A UTF-16 code unit, or a one-character string. A character
                outside the basic multilingual plane is appended as a surrogate pair.

        Raises:
            ValueError: If an integer `char` is not a UTF-16 code unit.
        """
        if isinstance(char, int):
            if not 0 <= char <= 0xFFFF:
                raise ValueError("char must be a UTF-16 code unit.")
            char = chr(char)
        self.strcat(char[:1])
