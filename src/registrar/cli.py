"""CLI entry point for Registrar.

Checks enrollment requests described in YAML files and serves the REST API.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from registrar import __version__
from registrar.api.models import EnrollmentRequest, build_enrollment
from registrar.catalog import CatalogError
from registrar.enrollment import (
    ConfigError,
    EnrollmentEngine,
    EnrollmentPolicy,
    ValidationMode,
    load_policy,
    policy_from_env,
)

# Exit codes
EXIT_REJECTED = 1
EXIT_INPUT_ERROR = 2

MODE_CHOICES = {
    "fail-fast": ValidationMode.FAIL_FAST,
    "accumulate": ValidationMode.ACCUMULATE,
}


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity.

    Args:
        verbose: Whether to enable debug logging.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def _resolve_policy(policy_path: Path | None) -> EnrollmentPolicy:
    if policy_path is not None:
        return load_policy(policy_path)
    return policy_from_env()


def load_request(request_path: Path) -> EnrollmentRequest:
    """Load an enrollment request from a YAML file.

    Raises:
        ConfigError: If the file is not a YAML mapping.
        ValidationError: If the mapping doesn't match the request schema.
    """
    try:
        with open(request_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {request_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Request must be a YAML mapping, got {type(data).__name__}")

    return EnrollmentRequest.model_validate(data)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Registrar - check course enrollment requests against academic rules."""
    pass


@main.command()
@click.argument(
    "request_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-p",
    "--policy",
    "policy_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a policy YAML file (default: $REGISTRAR_POLICY or built-in)",
)
@click.option(
    "--mode",
    type=click.Choice(list(MODE_CHOICES), case_sensitive=False),
    default=None,
    help="Report only the first violation or all of them (default: from request or accumulate)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Check the rules without registering anything",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
def check(
    request_path: Path,
    policy_path: Path | None,
    mode: str | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Check an enrollment request described in REQUEST_PATH.

    Exits with 1 when the request is rejected and 2 when the input is invalid.
    """
    setup_logging(verbose)

    try:
        policy = _resolve_policy(policy_path)
        request = load_request(request_path)
        student, offerings = build_enrollment(request)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)
    except ValidationError as e:
        click.echo(f"Invalid request: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)
    except CatalogError as e:
        click.echo(f"Catalog error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    validation_mode = MODE_CHOICES[mode.lower()] if mode else request.mode
    engine = EnrollmentEngine(policy=policy)

    if dry_run:
        violations = engine.validate(student, offerings, validation_mode)
    else:
        violations = engine.enroll(student, offerings, validation_mode).violations

    if violations:
        click.echo(f"REJECTED: {student.name} ({student.id})")
        for violation in violations:
            click.echo(f"  - {violation.message}")
        sys.exit(EXIT_REJECTED)

    if dry_run:
        click.echo(f"ACCEPTED (dry run): {student.name} ({student.id})")
        for offering in offerings:
            click.echo(f"  - {offering.course.id} {offering.course.name} (section {offering.section})")
        return

    click.echo(f"ACCEPTED: {student.name} ({student.id})")
    for registered in student.current_term:
        click.echo(
            f"  - {registered.course.id} {registered.course.name} (section {registered.section})"
        )


@main.command(name="policy")
@click.option(
    "-p",
    "--policy",
    "policy_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a policy YAML file (default: $REGISTRAR_POLICY or built-in)",
)
def show_policy(policy_path: Path | None) -> None:
    """Show the enrollment policy thresholds."""
    try:
        policy = _resolve_policy(policy_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    for name, value in policy.to_dict().items():
        click.echo(f"{name}: {value}")


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.option(
    "-p",
    "--policy",
    "policy_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a policy YAML file (default: $REGISTRAR_POLICY or built-in)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for rotating log files (default: $REGISTRAR_LOG_DIR or ./logs)",
)
def serve(host: str, port: int, policy_path: Path | None, log_dir: Path | None) -> None:
    """Serve the REST API with uvicorn."""
    import uvicorn  # noqa: PLC0415

    from registrar.api import create_app  # noqa: PLC0415
    from registrar.logging import setup_logging as setup_service_logging  # noqa: PLC0415

    try:
        policy = _resolve_policy(policy_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    setup_service_logging(log_dir=log_dir)
    uvicorn.run(create_app(policy=policy), host=host, port=port)


if __name__ == "__main__":
    main()
