"""CLI entry point for curl-interchange."""

import json
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from curl_interchange.auth import validate_auth
from curl_interchange.config import LOG_LEVELS, Settings
from curl_interchange.generator.command import generate_curl
from curl_interchange.generator.content_type import (
    header_entries,
    headers_for_transport,
    resolve_content_type,
)
from curl_interchange.parser.base import RequestConfig
from curl_interchange.parser.curl import parse_curl
from curl_interchange.parser.validator import validate_curl

logger = logging.getLogger(__name__)

input_option = click.option(
    "-i", "--input", "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the cURL command from a file instead of the argument or stdin.",
)


def _read_command(command: str | None, input_path: Path | None) -> str:
    """Take the command from the argument, a file, or stdin, in that order."""
    if command is not None:
        return command
    if input_path is not None:
        return input_path.read_text(encoding="utf-8")
    return click.get_text_stream("stdin").read()


def _load_request(path: Path) -> RequestConfig:
    """Load a YAML or JSON request file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return RequestConfig.model_validate(data)
    except (yaml.YAMLError, ValidationError) as exc:
        raise click.ClickException(f"Invalid request file {path}: {exc}")


def _dump(request: RequestConfig, fmt: str) -> str:
    data = request.model_dump(mode="json")
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def _finish(settings: Settings, warning_count: int) -> None:
    if settings.strict and warning_count:
        click.echo(f"{warning_count} warning(s) in strict mode.", err=True)
        sys.exit(1)


@click.group()
@click.option("--log-level", default=None, type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Logging level (overrides CURLX_LOG_LEVEL).")
@click.option("--strict", is_flag=True, help="Exit non-zero when warnings are reported.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, strict: bool):
    """curlx: convert between cURL commands and structured request files."""
    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid CURLX_* environment: {exc}")
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    if strict:
        settings = settings.model_copy(update={"strict": True})

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = settings


@main.command()
@click.argument("command", required=False)
@input_option
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Write the request file here instead of stdout.")
@click.option("--format", "fmt", default=None, type=click.Choice(["yaml", "json"]), help="Output format.")
@click.pass_obj
def parse(settings: Settings, command: str | None, input_path: Path | None, output: Path | None, fmt: str | None):
    """Parse a cURL command into a request file."""
    result = parse_curl(_read_command(command, input_path))

    for warning in result.warnings:
        click.echo(f"Warning [{warning.kind}]: {warning.message}", err=True)
    if not result.success:
        for error in result.errors:
            click.echo(f"Error [{error.kind}]: {error.message}", err=True)
        sys.exit(1)

    rendered = _dump(result.request, fmt or settings.output_format)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        click.echo(f"Request saved to {output}", err=True)
    else:
        click.echo(rendered)
    _finish(settings, len(result.warnings))


@main.command()
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def generate(settings: Settings, request_path: Path):
    """Generate a cURL command from a YAML/JSON request file."""
    request = _load_request(request_path)
    result = generate_curl(request)

    problems = validate_auth(request.auth)
    for problem in problems:
        click.echo(f"Warning [auth]: {problem}", err=True)
    for warning in result.warnings:
        click.echo(f"Warning [{warning.subject}/{warning.variant}]: {warning.message}", err=True)

    click.echo(result.command)
    _finish(settings, len(problems) + len(result.warnings))


@main.command()
@click.argument("command", required=False)
@input_option
def validate(command: str | None, input_path: Path | None):
    """Check a cURL command for structural problems without parsing it."""
    problems = validate_curl(_read_command(command, input_path))
    if not problems:
        click.echo("OK")
        return
    for problem in problems:
        click.echo(f"- {problem}")
    sys.exit(1)


@main.command("content-type")
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def content_type(request_path: Path):
    """Show the headers a request file would be sent with."""
    request = _load_request(request_path)
    hint = resolve_content_type(request.body, header_entries(request.headers))
    logger.debug("content-type hint for %s body: %s", request.body.type, hint)

    if hint.remove_content_type:
        click.echo("# Content-Type removed, the transport sets the multipart boundary")
    elif hint.content_type_override:
        click.echo(f"# Content-Type suggested: {hint.content_type_override}")
    else:
        click.echo("# Content-Type unchanged")

    for name, value in headers_for_transport(request).items():
        click.echo(f"{name}: {value}")
