import sys

import click

from mailscan.config import Config, load_config
from mailscan.errors import TraversalError
from mailscan.log import init_logger, logger
from mailscan.models import ScanReport, SearchCriteria
from mailscan.report import format_json, format_report, should_use_color
from mailscan.scanner import scan
from mailscan.utils import date_validation


@click.group()
def cli():
    pass


def apply_overrides(
    config: Config,
    workers: int | None,
    color: str | None,
    output_format: str | None,
    sort: bool | None,
) -> None:
    """
    Apply command line options on top of the loaded configuration.

    Options left unset keep the value from the config file.
    """
    if workers is not None:
        if workers < 1:
            raise click.BadParameter(
                "must be at least 1", param_hint="'--workers'"
            )
        config.scan.workers = workers
    if color is not None:
        config.output.color = color
    if output_format is not None:
        config.output.format = output_format
    if sort is not None:
        config.output.sort_by_path = sort


def render(
    report: ScanReport, criteria: SearchCriteria, config: Config, color: bool
) -> str:
    """Format the report according to the output configuration."""
    if config.output.sort_by_path:
        report = report.sorted_by_path()
    if config.output.format == "json":
        return format_json(report, criteria)
    return format_report(report, criteria, color=color)


@cli.command()
@click.option(
    "-c",
    "--config-path",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    required=False,
    help="Path to configuration file",
)
@click.option(
    "-f",
    "--folder",
    type=click.Path(),
    required=True,
    help="Path to folder with SMTP logs",
)
@click.option(
    "-e",
    "--email",
    type=str,
    required=True,
    help="Email address to search for",
)
@click.option(
    "-d",
    "--date",
    type=str,
    default="",
    help="Date to search (format: YYYY-MM-DD)",
)
@click.option(
    "-w",
    "--workers",
    type=int,
    required=False,
    help="Number of files scanned in parallel (default 50)",
)
@click.option(
    "--color",
    type=click.Choice(["auto", "always", "never"]),
    required=False,
    help="Colorize the report",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    required=False,
    help="Report format",
)
@click.option(
    "--sort/--no-sort",
    default=None,
    help="Order the report by file path",
)
def search(
    config_path: str | None,
    folder: str,
    email: str,
    date: str,
    workers: int | None,
    color: str | None,
    output_format: str | None,
    sort: bool | None,
):
    """
    Search SMTP logs under a folder for records mentioning an email address.
    """
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    init_logger(config)
    apply_overrides(config, workers, color, output_format, sort)

    try:
        criteria = SearchCriteria(email=email, date=date)
    except ValueError as e:
        raise click.UsageError(str(e))

    date_validation_result = date_validation(date)
    if date_validation_result:
        logger.warning(
            "%s, matching it as a plain substring", date_validation_result
        )

    try:
        report = scan(folder, criteria, config)
    except TraversalError as e:
        raise click.ClickException(str(e))

    # click.echo strips ANSI codes off a non-terminal unless told otherwise
    color = should_use_color(config.output.color, sys.stdout)
    click.echo(render(report, criteria, config, color), color=color)


@cli.command()
@click.option(
    "-c",
    "--config-path",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    required=False,
    help="Path to configuration file",
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse"]),
    default="stdio",
    help="MCP transport",
)
@click.option("--port", type=int, default=8080, help="Port for the sse transport")
def mcp(config_path: str | None, transport: str, port: int):
    """
    Serve the log search as an MCP tool.
    """
    from mailscan.mcp import run_server

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    init_logger(config)
    logger.info("Starting mailscan MCP server (%s)", transport)
    run_server(config, transport=transport, port=port)


if __name__ == "__main__":
    cli()
