"""
Reads an ADI file and prints its contents.
Records are printed as JSON, as JSON lines, or as the raw parser event stream.
"""

from __future__ import annotations

import json

import click

from .collector import EventRecorder
from .config import ADIConfig, ConfigError, build_config
from .constants import OUTPUT_FORMATS
from .filesystem import normalize_filepath
from .models import ADIDocument, EventType, ParseEvent
from .exceptions import ParseFileError
from .parser import ADIParser, load_document, parse_file

__all__ = ["cli"]


def render_document(document: ADIDocument, config: ADIConfig) -> str:
    """Render a collected document as JSON.

    Args:
        document: Collected header and records.
        config: Configuration selecting ``json`` or ``jsonl`` output, indentation,
            and whether comments are included.

    Returns:
        str: Rendered output, ending with a newline.
    """
    if config.output_format == "jsonl":
        return "".join(json.dumps(record, ensure_ascii=False) + "\n" for record in document.records)

    payload: dict[str, object] = {}
    if config.include_comments:
        payload["comments"] = document.comments
    payload["header"] = document.header
    payload["records"] = document.records
    return json.dumps(payload, ensure_ascii=False, indent=config.indent or None) + "\n"


def render_event(event: ParseEvent) -> str:
    """Render one parser event as a single line.

    Examples:
        render_event(ParseEvent(EventType.DATA, ("2M",), 3))  # '3\\tDATA\\t"2M"'
    """
    if event.type is EventType.START_DATA_SPECIFIER:
        field_name, data_length, data_type = event.args
        details = field_name
        if data_length is not None:
            details += f":{data_length}"
        if data_type is not None:
            details += f":{data_type}"
    elif event.type in (EventType.DATA, EventType.COMMENT):
        details = json.dumps(event.args[0], ensure_ascii=False)
    else:
        details = " ".join(str(arg) for arg in event.args)
    return f"{event.line_number}\t{event.type.name}\t{details}".rstrip("\t")


@click.command()
@click.version_option(package_name="adi-parser")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format (json, jsonl or events)",
)
@click.option(
    "--comments/--no-comments",
    "include_comments",
    default=None,
    help="Include comments in JSON output",
)
@click.option(
    "--uppercase/--preserve-case",
    "uppercase_field_names",
    default=None,
    help="Upper-case field names in records",
)
@click.option("--indent", type=int, help="JSON indentation (0 for compact output)")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output_format: str | None = None,
    include_comments: bool | None = None,
    uppercase_field_names: bool | None = None,
    indent: int | None = None,
):
    """
    Entry point for printing the contents of an ADI file.

    Args:
        filepath: Path to the ADI file to read.
        output_format: Override for the output format.
        include_comments: Override for including comments in JSON output.
        uppercase_field_names: Override for upper-casing field names.
        indent: Override for JSON indentation.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If the file cannot be read or parsed.

    Examples:
        adi-parser log.adi --format jsonl
    """
    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            path.parent,
            output_format=output_format,
            include_comments=include_comments,
            uppercase_field_names=uppercase_field_names,
            indent=indent,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if config.output_format == "events":
        recorder = EventRecorder()
        try:
            parser = ADIParser(load_document(path, config), recorder)
        except ParseFileError as error:
            raise click.ClickException(str(error)) from error
        if not parser.parse():
            raise click.ClickException(str(parser.parser_error))
        for event in recorder.events:
            click.echo(render_event(event))
        return

    try:
        document = parse_file(path, config)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    click.echo(render_document(document, config), nl=False)


if __name__ == "__main__":
    cli()
