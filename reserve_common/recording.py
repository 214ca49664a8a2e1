"""Reservation log maintained in the project root."""

from __future__ import annotations

import logging
from pathlib import Path

__all__ = ["prepend_entry", "record_reservation"]

LOGGER = logging.getLogger(__name__)


def prepend_entry(previous: bytes, package_name: str) -> bytes:
    """Return log content with ``package_name`` placed first.

    ``previous`` is kept byte for byte, line endings included.

    Examples
    --------
    >>> prepend_entry(b"b\\r\\n", "a")
    b'a\\nb\\r\\n'
    >>> prepend_entry(b"", "a")
    b'a\\n'
    """
    return f"{package_name}\n".encode() + previous


def record_reservation(log_path: Path, package_name: str) -> bool:
    """Prepend ``package_name`` to ``log_path``, newest entry first.

    A missing log is created. Failures are logged as warnings and reported by
    returning ``False``; they never change the outcome of the run.
    """
    try:
        try:
            previous = log_path.read_bytes()
        except FileNotFoundError:
            previous = b""
        log_path.write_bytes(prepend_entry(previous, package_name))
    except OSError as exc:
        LOGGER.warning("Warning: failed to update %s - %s", log_path.name, exc)
        return False
    LOGGER.info("Recorded reserved package in %s", log_path)
    return True
