"""Formatted text rendered into byte vectors.

Rendering uses Python's ``%`` operator as the formatter. A ``bytes`` format string produces
narrow text and a ``str`` format string produces wide text. The builder writes through a
bounded formatter into a working vector and doubles the vector until the text fits.
"""

import logging
from typing import Any

from bytevec import _config
from bytevec._bytevector import ByteVector
from bytevec._errors import _bvec_assert
from bytevec._text import CharView, WideCharView, _strlen, _TextView

__all__ = ["format_append", "format_into", "format_replace"]

logger: logging.Logger = logging.getLogger(__name__)


def _view_type(fmt: bytes | str) -> type[_TextView[Any]]:
    """Select the string view matching the format string."""
    if isinstance(fmt, str):
        return WideCharView
    if isinstance(fmt, (bytes, bytearray)):
        return CharView
    raise TypeError("fmt must be bytes or str.")


def _bounded_format(view: _TextView[Any], fmt: bytes | str, args: tuple[Any, ...]) -> int:
    """Render ``fmt % args`` into the elements of ``view``, truncating like ``snprintf``.

    At most ``len(view) - 1`` characters are written, followed by a terminator.

    Args:
        view (CharView or WideCharView): The destination; its size is the buffer size.
        fmt (bytes or str): The format string.
        args (tuple): The format arguments.

    Returns:
        int: The length of the complete rendering, in elements.
    """
    rendered = view._encode(fmt % args)
    bufsize = len(view)
    written = min(len(rendered), bufsize - 1)
    data = view.data
    data[:written] = rendered[:written]
    data[written] = 0
    return len(rendered)


def _vformat(fmt: bytes | str, args: tuple[Any, ...]) -> ByteVector:
    """Render into a new vector, retrying with a doubled buffer until the text fits.

    Raises:
        InternalError: If doubling the buffer would exceed the maximum vector size.
    """
    view = _view_type(fmt)()
    view.resize(_config.DEFAULT_PRINTF_BUFSIZE)

    while True:
        bufsize = len(view)
        _bounded_format(view, fmt, args)

        data = view.data
        data[bufsize - 1] = 0
        if _strlen(data) < bufsize - 1:
            break

        # buffer might not be large enough, double it and retry
        _bvec_assert(bufsize * 2 * view.itemsize <= view.vector.max_size, "integer overflow")
        logger.debug("Formatted text did not fit in %d elements, retrying", bufsize)
        view.resize(bufsize * 2)

    view.strshrink()
    return view.vector


def format_into(fmt: bytes | str, *args: Any) -> ByteVector:
    """Render ``fmt % args`` into a new vector.

    Args:
        fmt (bytes or str): The format string; bytes for narrow text, str for wide text.
        *args: The format arguments.

    Returns:
        ByteVector: A vector holding the terminated text, shrunk to fit.

    Raises:
        TypeError: If `fmt` is neither bytes nor str, or the arguments do not match it.
        InternalError: If the working buffer cannot grow any further.
    """
    return _vformat(fmt, args)


def format_append(vector: ByteVector, fmt: bytes | str, *args: Any) -> None:
    """Render ``fmt % args`` and concatenate it to the string held by ``vector``.

    Args:
        vector (ByteVector): The vector holding the string to extend.
        fmt (bytes or str): The format string; bytes for narrow text, str for wide text.
        *args: The format arguments.
    """
    view_type = _view_type(fmt)
    rendered = _vformat(fmt, args)
    view_type(vector).strcat(view_type(rendered).getstr())
    rendered.destroy()


def format_replace(vector: ByteVector, fmt: bytes | str, *args: Any) -> None:
    """Replace the contents of ``vector`` with the rendering of ``fmt % args``.

    Args:
        vector (ByteVector): The destination vector.
        fmt (bytes or str): The format string; bytes for narrow text, str for wide text.
        *args: The format arguments.
    """
    rendered = _vformat(fmt, args)
    vector.move_from(rendered)
    rendered.destroy()
