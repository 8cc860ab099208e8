"""Command line entry point for the fingertips-client application."""

from __future__ import annotations

from pathlib import Path

import click
import pandas as pd
import structlog

from fingertips_client.data import (
    FingertipsHttpClient,
    area_types,
    deprivation_decile,
    fetch_data,
    join_deprivation,
)
from fingertips_client.data.endpoints import BASE_URL, DEFAULT_AREA_TYPE_ID
from fingertips_client.errors import FingertipsError
from fingertips_client.logging import configure_logging
from fingertips_client.output import DeprivationPlotConfig, generate_deprivation_plot
from fingertips_client.output.utils import format_correlation

OUTPUT_HELP = "Write the table as CSV to this path instead of standard output."
INSECURE_HELP = (
    "Disable TLS certificate verification for API requests. "
    "May also be set via the FINGERTIPS_INSECURE env var."
)

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")

logger = structlog.get_logger(__name__)


def _build_client(ctx: click.Context) -> FingertipsHttpClient:
    """Create an HTTP client from the group-level options."""
    ctx.ensure_object(dict)
    return FingertipsHttpClient(
        base_url=ctx.obj.get("base_url", BASE_URL),
        timeout=ctx.obj.get("timeout", 30.0),
        verify=not ctx.obj.get("insecure", False),
    )


def _write_frame(frame: pd.DataFrame, output: Path | None) -> None:
    """Emit a table as CSV to a file or standard output."""
    if output is None:
        click.echo(frame.to_csv(index=False), nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)
    click.echo(f"Wrote {len(frame)} rows to {output}")
    logger.debug("table.written", output=str(output), rows=len(frame))


def _optional(values: tuple) -> list | None:
    """Map an empty repeatable option to ``None``."""
    return list(values) or None


@click.group()
@click.option(
    "--base-url",
    envvar="FINGERTIPS_BASE_URL",
    default=BASE_URL,
    show_default=True,
    help="Root URL of the Fingertips API.",
)
@click.option(
    "--timeout",
    envvar="FINGERTIPS_TIMEOUT",
    type=float,
    default=30.0,
    show_default=True,
    help="Per-request timeout in seconds.",
)
@click.option("--insecure", envvar="FINGERTIPS_INSECURE", is_flag=True, help=INSECURE_HELP)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="FINGERTIPS_LOG_LEVEL",
    default="warning",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="FINGERTIPS_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: str,
    timeout: float,
    insecure: bool,
    log_level: str,
    log_format: str,
) -> None:
    """Query the Fingertips public health API."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    ctx.obj.update({"base_url": base_url, "timeout": timeout, "insecure": insecure})
    logger.bind(command_group="fingertips").debug(
        "cli.initialized",
        base_url=base_url,
        insecure=insecure,
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("area-types")
@click.option(
    "--area-type-id",
    "area_type_ids",
    type=int,
    multiple=True,
    help="Only list mappings for these child area types.",
)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help=OUTPUT_HELP)
@click.pass_context
def area_types_command(
    ctx: click.Context,
    *,
    area_type_ids: tuple[int, ...],
    output: Path | None,
) -> None:
    """List area types with each of their parent area types."""
    client = _build_client(ctx)
    try:
        frame = area_types(_optional(area_type_ids), client=client)
    finally:
        client.close()
    _write_frame(frame, output)


@cli.command("fetch-data")
@click.option("--indicator-id", "indicator_ids", type=int, multiple=True)
@click.option("--domain-id", "domain_ids", type=int, multiple=True)
@click.option(
    "--profile-id",
    "profile_ids",
    type=int,
    multiple=True,
    help="Profile ids; paired position by position with --indicator-id when both are given.",
)
@click.option(
    "--area-type-id",
    "area_type_ids",
    type=int,
    multiple=True,
    help=f"Child area type ids (default {DEFAULT_AREA_TYPE_ID}).",
)
@click.option("--parent-area-type-id", "parent_area_type_ids", type=int, multiple=True)
@click.option("--area-code", "area_codes", multiple=True)
@click.option("--categorytype", is_flag=True, help="Keep category type breakdowns.")
@click.option("--rank", is_flag=True, help="Add Polarity, Rank and AreaValuesCount columns.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help=OUTPUT_HELP)
@click.pass_context
def fetch_data_command(
    ctx: click.Context,
    *,
    indicator_ids: tuple[int, ...],
    domain_ids: tuple[int, ...],
    profile_ids: tuple[int, ...],
    area_type_ids: tuple[int, ...],
    parent_area_type_ids: tuple[int, ...],
    area_codes: tuple[str, ...],
    categorytype: bool,
    rank: bool,
    output: Path | None,
) -> None:
    """Download indicator data for one or more area types."""
    cmd_log = logger.bind(command="fetch-data")
    cmd_log.info(
        "command.start",
        indicator_ids=list(indicator_ids),
        domain_ids=list(domain_ids),
        profile_ids=list(profile_ids),
    )
    client = _build_client(ctx)
    try:
        frame = fetch_data(
            indicator_id=_optional(indicator_ids),
            area_code=_optional(area_codes),
            domain_id=_optional(domain_ids),
            profile_id=_optional(profile_ids),
            area_type_id=_optional(area_type_ids) or DEFAULT_AREA_TYPE_ID,
            parent_area_type_id=_optional(parent_area_type_ids),
            categorytype=categorytype,
            rank=rank,
            client=client,
        )
    except FingertipsError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        client.close()
    _write_frame(frame, output)
    cmd_log.info("command.completed", rows=len(frame))


@cli.command("deprivation")
@click.option("--area-type-id", type=int, default=DEFAULT_AREA_TYPE_ID, show_default=True)
@click.option("--year", type=int, default=2015, show_default=True)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help=OUTPUT_HELP)
@click.pass_context
def deprivation_command(
    ctx: click.Context,
    *,
    area_type_id: int,
    year: int,
    output: Path | None,
) -> None:
    """Print IMD scores and deciles (1 = most deprived) by area."""
    client = _build_client(ctx)
    try:
        frame = deprivation_decile(area_type_id, year, client=client)
    except FingertipsError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        client.close()
    _write_frame(frame, output)


@cli.command("plot")
@click.option("--indicator-id", "indicator_ids", type=int, multiple=True, required=True)
@click.option("--timeperiod", required=True, help='Time period label, e.g. "2012 - 14".')
@click.option("--area-type-id", type=int, default=DEFAULT_AREA_TYPE_ID, show_default=True)
@click.option(
    "--area-type-name",
    default="County & UA",
    show_default=True,
    help="AreaType label of the rows to chart.",
)
@click.option("--year", type=int, default=2015, show_default=True, help="IMD release year.")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("out"),
    show_default=True,
)
@click.option("--filename", default="deprivation.png", show_default=True)
@click.pass_context
def plot_command(
    ctx: click.Context,
    *,
    indicator_ids: tuple[int, ...],
    timeperiod: str,
    area_type_id: int,
    area_type_name: str,
    year: int,
    output_dir: Path,
    filename: str,
) -> None:
    """Chart indicator values against deprivation for one time period."""
    cmd_log = logger.bind(command="plot", indicator_ids=list(indicator_ids))
    client = _build_client(ctx)
    try:
        data = fetch_data(indicator_id=list(indicator_ids), area_type_id=area_type_id, client=client)
        deprivation = deprivation_decile(area_type_id, year, client=client)
    except FingertipsError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        client.close()

    if data.empty:
        raise click.ClickException("No data was returned for the requested indicators.")
    selected = data.loc[
        (data["AreaType"] == area_type_name) & (data["Timeperiod"].astype(str) == timeperiod)
    ]
    joined = join_deprivation(selected, deprivation)
    try:
        report = generate_deprivation_plot(
            joined,
            output_dir=output_dir,
            filename=filename,
            config=DeprivationPlotConfig(title=f"{area_type_name}, {timeperiod}"),
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(
        f"Wrote {report.path} ({report.summary.count} areas, "
        f"{format_correlation(report.summary.correlation)})"
    )
    cmd_log.info("command.completed", output=str(report.path), rows=report.summary.count)


if __name__ == "__main__":  # pragma: no cover
    cli()
