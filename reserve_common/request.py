"""Reservation request model and input resolution."""

from __future__ import annotations

import dataclasses
import re
import typing as typ

from .errors import ValidationError

__all__ = [
    "MAX_PACKAGE_NAME_LENGTH",
    "ReservationRequest",
    "resolve_request",
    "validate_package_name",
]

MAX_PACKAGE_NAME_LENGTH = 214
_WHITESPACE = re.compile(r"\s")


@dataclasses.dataclass(slots=True, frozen=True)
class ReservationRequest:
    """Package name to reserve and the username recorded as its author."""

    package_name: str
    username: str

    @classmethod
    def from_inputs(
        cls, package_name: str | None, username: str | None
    ) -> ReservationRequest:
        """Validate raw inputs and return a request.

        The username is trimmed; the package name is checked as given.

        Raises
        ------
        ValidationError
            Raised when either field fails validation.
        """
        name = validate_package_name(package_name)
        cleaned_username = (username or "").strip()
        if not cleaned_username:
            message = "Invalid username: it must not be empty."
            raise ValidationError(message)
        return cls(package_name=name, username=cleaned_username)


def validate_package_name(name: str | None) -> str:
    """Return ``name`` when it is acceptable as an unscoped package name.

    Examples
    --------
    >>> validate_package_name("valid-name")
    'valid-name'
    """
    if not name:
        message = "Invalid package name: it must not be empty."
        raise ValidationError(message)
    if len(name) > MAX_PACKAGE_NAME_LENGTH:
        message = (
            f"Invalid package name: {len(name)} characters exceeds the "
            f"{MAX_PACKAGE_NAME_LENGTH} character limit."
        )
        raise ValidationError(message)
    if _WHITESPACE.search(name):
        message = f"Invalid package name {name!r}: whitespace is not allowed."
        raise ValidationError(message)
    if name[0] in "._":
        message = f"Invalid package name {name!r}: it must not start with '.' or '_'."
        raise ValidationError(message)
    return name


def resolve_request(
    package_name: str | None,
    username: str | None,
    *,
    interactive: bool,
    prompt: typ.Callable[[str], str] = input,
) -> ReservationRequest:
    """Fill missing fields by prompting, then validate.

    Parameters
    ----------
    package_name, username:
        Values supplied by flags or positional arguments.
    interactive:
        Whether the process is attached to a terminal. Missing values are
        only prompted for when this is ``True``.
    prompt:
        Callable used to ask for missing values.

    Raises
    ------
    ValidationError
        Raised when a value is missing in a non-interactive session, when
        input ends before a prompt is answered or when the resolved values are
        invalid.
    """
    if not interactive:
        if not package_name:
            message = (
                "package name missing and not in interactive terminal. "
                "Provide -p/--package-name."
            )
            raise ValidationError(message)
        if not username:
            message = (
                "username missing and not in interactive terminal. "
                "Provide -u/--username."
            )
            raise ValidationError(message)

    try:
        if not package_name:
            package_name = prompt("Package name to reserve: ").strip()
        if not username:
            username = prompt("Username to reserve under: ").strip()
    except EOFError as exc:
        message = "input closed before a package name and username were given."
        raise ValidationError(message) from exc
    return ReservationRequest.from_inputs(package_name, username)
