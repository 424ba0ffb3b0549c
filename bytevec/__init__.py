"""bytevec: A growable, contiguous byte vector with typed and string views."""

from importlib.metadata import PackageNotFoundError, version

from bytevec._bytevector import ByteVector
from bytevec._errors import InternalError
from bytevec._format import format_append, format_into, format_replace
from bytevec._text import CharView, WideCharView
from bytevec._typed import (
    TypedView,
    push_char,
    push_int,
    push_pointer,
    push_unsigned,
    push_wchar,
)

__version__: str
"""The version of the library."""
try:
    __version__ = version("bytevec")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "ByteVector",
    "CharView",
    "InternalError",
    "TypedView",
    "WideCharView",
    "format_append",
    "format_into",
    "format_replace",
    "push_char",
    "push_int",
    "push_pointer",
    "push_unsigned",
    "push_wchar",
]
