"""Tests for reservation request validation and input resolution."""

from __future__ import annotations

import pytest

from reserve_common import (
    ReservationRequest,
    ValidationError,
    resolve_request,
    validate_package_name,
)


@pytest.mark.parametrize(
    "name",
    ["", "has space", "tab\tname", "a" * 215, ".hidden", "_private"],
    ids=["empty", "space", "tab", "too-long", "leading-dot", "leading-underscore"],
)
def test_validate_package_name_rejects_invalid_names(name: str) -> None:
    """Malformed names are refused before any work starts."""
    with pytest.raises(ValidationError, match="Invalid package name"):
        validate_package_name(name)


@pytest.mark.parametrize("name", ["valid-name", "a" * 214, "x.y_z"])
def test_validate_package_name_accepts_valid_names(name: str) -> None:
    """Names within the registry rules are returned unchanged."""
    assert validate_package_name(name) == name


def test_from_inputs_trims_username() -> None:
    """Surrounding whitespace is stripped from the username."""
    request = ReservationRequest.from_inputs("valid-name", "  octocat \n")
    assert request == ReservationRequest("valid-name", "octocat")


@pytest.mark.parametrize("username", [None, "", "   "])
def test_from_inputs_rejects_blank_username(username: str | None) -> None:
    """A username that trims to nothing is invalid."""
    with pytest.raises(ValidationError, match="Invalid username"):
        ReservationRequest.from_inputs("valid-name", username)


def test_resolve_request_uses_supplied_values_without_prompting() -> None:
    """Supplied values win and the prompt is never consulted."""

    def _prompt(_question: str) -> str:
        message = "prompt should not be called"
        raise AssertionError(message)

    request = resolve_request("valid-name", "octocat", interactive=True, prompt=_prompt)
    assert request.package_name == "valid-name"
    assert request.username == "octocat"


def test_resolve_request_prompts_for_missing_values() -> None:
    """Interactive sessions ask for each missing field in turn."""
    answers = iter([" prompted-name ", " someone "])
    questions: list[str] = []

    def _prompt(question: str) -> str:
        questions.append(question)
        return next(answers)

    request = resolve_request(None, None, interactive=True, prompt=_prompt)

    assert request == ReservationRequest("prompted-name", "someone")
    assert questions == ["Package name to reserve: ", "Username to reserve under: "]


@pytest.mark.parametrize(
    ("package_name", "username", "flag"),
    [(None, "octocat", "--package-name"), ("valid-name", None, "--username")],
)
def test_resolve_request_fails_without_terminal(
    package_name: str | None, username: str | None, flag: str
) -> None:
    """Missing values in a non-interactive session name the flag to use."""
    with pytest.raises(ValidationError, match=flag):
        resolve_request(package_name, username, interactive=False)


def test_resolve_request_validates_prompted_name() -> None:
    """Prompted answers go through the same validation as flags."""
    with pytest.raises(ValidationError):
        resolve_request(None, "octocat", interactive=True, prompt=lambda _q: "bad name")


def test_resolve_request_reports_closed_input() -> None:
    """End of input at a prompt is reported as a validation error."""

    def _closed(_question: str) -> str:
        raise EOFError

    with pytest.raises(ValidationError, match="input closed"):
        resolve_request(None, None, interactive=True, prompt=_closed)
