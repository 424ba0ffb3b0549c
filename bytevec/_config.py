"""Tunable defaults for the byte vector.

Debug mode is read once from the ``BYTEVEC_DEBUG`` environment variable and may be
overridden per vector through the ``debug`` constructor argument.
"""

import os
import sys

__all__: list[str] = []

DEFAULT_CAPACITY = 16
"""Capacity, in bytes, of the first allocation of an empty vector."""

DEFAULT_PRINTF_BUFSIZE = 256
"""Initial working size, in elements, of the formatted-text builder."""

FILL_BYTE = 0xCD
"""Byte written over released, cleared or uninitialised storage in debug mode."""

SIZE_MAX = sys.maxsize
"""Largest size or capacity a vector may reach."""


def _env_flag(name: str) -> bool:
    """Interpret an environment variable as a boolean switch.

    Args:
        name (str): The name of the environment variable.

    Returns:
        bool: True if the variable is set to ``1``, ``true``, ``yes`` or ``on``.
    """
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


DEBUG = _env_flag("BYTEVEC_DEBUG")
"""Default debug mode for new vectors."""
