"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from tcapi_schema_tools.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ToolSettings,
    load_settings,
    write_placeholder_configuration,
)
from tcapi_schema_tools.error_reporting import (
    SchemaIOError,
    SchemaToolError,
    UnknownSchemaReference,
    format_error_report,
)
from tcapi_schema_tools.file_io import read_json_file, read_json_text
from tcapi_schema_tools.schema_authoring import SchemaComposer, split_schema_file, write_schema
from tcapi_schema_tools.schema_registry import SchemaRepository
from tcapi_schema_tools.type_validation import SchemaCatalog
from tcapi_schema_tools.validation import SchemaValidator

_PACKAGE_LOGGER = logging.getLogger("tcapi_schema_tools")
_PACKAGE_LOGGER.addHandler(logging.NullHandler())
_LOGGER = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"


class CliError(Exception):
    """Custom CLI error."""


class _ClickEchoHandler(logging.Handler):
    """Send log records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


def _configure_logging(level: int) -> None:
    if not any(isinstance(handler, _ClickEchoHandler) for handler in _PACKAGE_LOGGER.handlers):
        _PACKAGE_LOGGER.addHandler(_ClickEchoHandler())
    _PACKAGE_LOGGER.setLevel(level)


def _describe_failure(exc: Exception) -> str:
    if isinstance(exc, SchemaIOError):
        if exc.code == "ENOENT":
            return f"ERROR: '{exc.path}' does not exist"
        if exc.code == "EISDIR":
            return "ERROR: Is a directory"
        if exc.code == "EACCES":
            return f"ERROR: Don't have permissions to access '{exc.path}'"
    return "ERROR: " + format_error_report(exc)


def _settings(ctx: click.Context) -> ToolSettings:
    settings = ctx.find_object(ToolSettings)
    return settings if settings is not None else ToolSettings()


def _schema_validator() -> SchemaValidator:
    return SchemaValidator(SchemaRepository())


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="tcapi-schema-tools")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML settings file",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Compose, split and validate TinCan (xAPI) JSON schemas."""
    try:
        ctx.obj = load_settings(config_path)
    except ConfigurationError as exc:
        raise CliError(f"ERROR: {exc}") from exc


@cli.command(name="join")
@click.argument("src_dir", type=click.Path(path_type=str))
@click.argument("dst_file", type=click.Path(path_type=str))
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only print errors.")
@click.pass_context
def join(ctx: click.Context, src_dir: str, dst_file: str, quiet: bool) -> None:
    """Join the fragment files of SRC_DIR into the composite schema DST_FILE."""
    settings = _settings(ctx)
    _configure_logging(logging.WARNING if quiet else logging.INFO)
    validator = _schema_validator()
    composer = SchemaComposer(
        validator,
        validate_schemas=settings.validate_schemas,
        max_workers=settings.max_workers,
    )
    try:
        composite = composer.compose_directory(src_dir)
        write_schema(composite, dst_file, validator, validate=False)
    except SchemaToolError as exc:
        raise CliError(_describe_failure(exc)) from exc


@cli.command(name="split")
@click.argument("src_file", type=click.Path(path_type=str))
@click.argument("dst_dir", type=click.Path(path_type=str))
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only print errors.")
@click.pass_context
def split(ctx: click.Context, src_file: str, dst_dir: str, quiet: bool) -> None:
    """Split the composite schema SRC_FILE into one fragment file per property in DST_DIR."""
    settings = _settings(ctx)
    _configure_logging(logging.WARNING if quiet else logging.INFO)
    if not Path(src_file).exists():
        raise CliError(f"File '{src_file}' does not exist")
    try:
        split_schema_file(
            src_file, dst_dir, _schema_validator(), validate=settings.validate_schemas
        )
    except SchemaToolError as exc:
        raise CliError(_describe_failure(exc)) from exc


@cli.command(name="validate")
@click.argument("file", required=False, type=click.Path(path_type=str))
@click.option("--type", "-t", "type_id", required=False, help="Check against this type id.")
@click.option(
    "--schema",
    "-s",
    "schema_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Use this schema directory.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="More informative messages.")
@click.option("--debug", "-d", is_flag=True, default=False, help="Even more messages.")
@click.pass_context
def validate(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    file: str | None,
    type_id: str | None,
    schema_dir: str | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Check the structure of TinCan JSON data.

    Reads FILE, or standard input when FILE is omitted. Without --type, the
    document is checked against every type id of the schema directory.
    """
    settings = _settings(ctx)
    if debug:
        _configure_logging(logging.DEBUG)
    elif verbose:
        _configure_logging(logging.INFO)
    else:
        _configure_logging(logging.WARNING)

    catalog = SchemaCatalog.from_settings(settings)
    schema_path = Path(schema_dir) if schema_dir else settings.schema_dir
    fpath = file or STDIN_NAME
    try:
        catalog.load_schema_dir(schema_path)
        if file:
            instance = read_json_file(file)
        else:
            instance = read_json_text(click.get_text_stream("stdin").read())
    except SchemaToolError as exc:
        raise CliError(_describe_failure(exc)) from exc

    _LOGGER.info("Processing '%s' ...", fpath)
    if not type_id:
        _LOGGER.warning(
            "WARNING: No schema id provided; trying all possibilities (may take a while...)"
        )
    try:
        matches = catalog.validate_document(instance, type_id)
    except UnknownSchemaReference as exc:
        if not type_id:
            raise CliError(_describe_failure(exc)) from exc
        click.echo(
            f"UNKNOWN schema type id '{type_id}'\nSee '{schema_path}' for allowed type ids."
        )
        ctx.exit(1)
    except SchemaToolError as exc:
        if verbose or debug:
            click.echo(format_error_report(exc))
        message = f"INVALID JSON file '{fpath}'"
        if type_id:
            message += f" as a {catalog.uri_for(type_id)}"
        click.echo(message)
        ctx.exit(1)
    else:
        for uri in matches:
            if debug:
                _LOGGER.debug("VALID as a %s", uri)
            else:
                click.echo(f"VALID as a {uri}")


@cli.command(name="init-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def init_config(output_path: str) -> None:
    """Generate a YAML settings template listing every key with its default."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
