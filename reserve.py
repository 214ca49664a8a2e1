"""Command-line entry point for the package name reservation helper.

Examples
--------
Reserve a name using the token exported in the environment::

    export NPM_TOKEN="npm_xxx"
    npm-reserve -p my-package -u octocat

Positional arguments work too, and missing values are prompted for when a
terminal is attached::

    npm-reserve my-package octocat
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from reserve_common import ReserveError, load_config, reserve, resolve_request

app = App(
    name="npm-reserve",
    help=(
        "Reserve a package name by publishing a placeholder version from a "
        "temporary copy of this project. The username is used for author "
        "metadata only; the tool never publishes as a scoped package."
    ),
)


def _is_interactive() -> bool:
    """Return ``True`` when both stdin and stdout are terminals."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )


@app.default
def main(
    package_name: typ.Annotated[
        str | None, Parameter(name=["--package-name", "-p"])
    ] = None,
    username: typ.Annotated[str | None, Parameter(name=["--username", "-u"])] = None,
    *,
    project_dir: Path = Path("."),
    verbose: bool = False,
) -> None:
    """Reserve ``package_name`` on the npm registry.

    Parameters
    ----------
    package_name:
        Package name to reserve.
    username:
        Author recorded in the placeholder manifest.
    project_dir:
        Template project copied into the temporary workspace.
    verbose:
        Enable debug logging.
    """
    _configure_logging(verbose=verbose)
    try:
        request = resolve_request(
            package_name, username, interactive=_is_interactive()
        )
        config = load_config(project_dir.resolve())
        result = reserve(request, config)
    except ReserveError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not result.recorded:
        print(
            f"warning: {result.package_name} was published but not recorded "
            f"in {config.log_file}",
            file=sys.stderr,
        )


if __name__ == "__main__":
    app()
