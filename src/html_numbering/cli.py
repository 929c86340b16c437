"""Click CLI for the HTML numbering converter.

Commands:
    convert   Full HTML → .docx conversion
    inspect   Print the numbering report of an existing .docx
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from html_numbering.config import Config
from html_numbering.exceptions import HtmlNumberingError
from html_numbering.pipeline import Pipeline


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML configuration file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """HTML to Word converter with native list and heading numbering."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.load(config_path)
    except HtmlNumberingError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    if verbose:
        config.verbose = True

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["pipeline"] = Pipeline(config)


@main.command()
@click.argument("input_html", type=click.Path(exists=True, path_type=Path))
@click.argument("output_docx", type=click.Path(path_type=Path), required=False)
@click.option(
    "--template",
    "template_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Existing .docx to append to; its numbering is preserved.",
)
@click.option("--report", is_flag=True, help="Save numbering report JSON alongside output.")
@click.option(
    "--report-path",
    type=click.Path(path_type=Path),
    default=None,
    help="Custom path for the report JSON file.",
)
@click.option(
    "--no-heading-numbers",
    is_flag=True,
    help="Keep numbered heading text as-is instead of using Word numbering.",
)
@click.pass_context
def convert(
    ctx: click.Context,
    input_html: Path,
    output_docx: Path | None,
    template_path: Path | None,
    report: bool,
    report_path: Path | None,
    no_heading_numbers: bool,
) -> None:
    """Convert an HTML file to a Word document."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    if no_heading_numbers:
        pipeline.config.numbering.number_headings = False

    if output_docx is None:
        output_docx = input_html.with_suffix(".docx")

    try:
        result = pipeline.convert(
            input_html,
            output_docx,
            template_path=template_path,
            save_report=report,
            report_path=report_path,
        )
        click.echo(f"Generated: {result}")

        if report and pipeline.last_report:
            rpt = pipeline.last_report
            click.echo(
                f"Report: {rpt.definition_count} definitions, "
                f"{rpt.instance_count} instances, "
                f"{len(rpt.orphan_instance_ids)} orphan instances"
            )
    except HtmlNumberingError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("input_docx", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, input_docx: Path) -> None:
    """Print the numbering definitions and instances of a .docx as JSON."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    try:
        click.echo(pipeline.inspect(input_docx))
    except HtmlNumberingError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
