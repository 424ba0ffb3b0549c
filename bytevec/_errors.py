"""Fatal error kind raised when a byte vector invariant would be violated."""

import logging

__all__ = ["InternalError"]

logger: logging.Logger = logging.getLogger(__name__)


class InternalError(BaseException):
    """A byte vector invariant was violated.

    Raised on growth arithmetic overflow, size underflow and allocation failure.
    These signal a logic bug rather than a condition a caller can handle, so the
    class derives from ``BaseException`` and is not caught by ``except Exception``.
    """


def _bvec_assert(condition: bool, message: str) -> None:
    """Raise :class:`InternalError` if ``condition`` does not hold.

    Args:
        condition (bool): The invariant to check.
        message (str): Short description of the violation.

    Raises:
        InternalError: If ``condition`` is false.
    """
    if not condition:
        logger.critical("bytevector internal error: %s", message)
        raise InternalError(f"bytevector internal error: {message}")
