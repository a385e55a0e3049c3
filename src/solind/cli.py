import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from solind.core.config import BatchConfig
from solind.core.interfaces import IEventDecoder
from solind.decoding import DiscriminatorDecoder, TextLogDecoder, make_registry
from solind.extraction import EventExtractor
from solind.orchestration import BatchExtractService
from solind.storage import ShardsDir, ShardWriter, load_transactions

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _make_decoder(config: BatchConfig) -> IEventDecoder:
    if config.event_names:
        return DiscriminatorDecoder(make_registry(config.event_names))
    return TextLogDecoder()


@click.group()
def cli() -> None:
    """solind: extract program events from Solana transaction logs."""


@cli.command("extract")
@click.option("--program", "program_id", required=True, help="Target program id (base58)")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON array or JSONL file of {signature, slot, err, logs} records",
)
@click.option("--event", "events", multiple=True, help="Event name to decode by discriminator; repeat to OR")
@click.option("--out", "out_root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Parquet output root")
@click.option("--rows-per-shard", type=int, default=250_000, show_default=True)
@click.option("--batch-rows", type=int, default=10_000, show_default=True, help="Rows buffered per sink write")
@click.option(
    "--skip-failed/--include-failed",
    default=False,
    show_default=True,
    help="Skip transactions whose err field is set",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log stack transitions")
def extract_cmd(
    program_id: str,
    input_path: Path,
    events: tuple[str, ...],
    out_root: Path | None,
    rows_per_shard: int,
    batch_rows: int,
    skip_failed: bool,
    verbose: bool,
) -> None:
    """Extract one program's events from a file of transaction logs."""
    _setup_logging(verbose)

    if rows_per_shard <= 0 or batch_rows <= 0:
        raise click.UsageError("--rows-per-shard and --batch-rows must be positive")

    config = BatchConfig(
        program_id=program_id,
        input_path=input_path,
        out_root=out_root,
        event_names=list(events),
        rows_per_shard=rows_per_shard,
        batch_rows=batch_rows,
        skip_failed_transactions=skip_failed,
    )

    extractor = EventExtractor.from_config(config.extractor_config(), _make_decoder(config))
    sink = None
    if config.out_root is not None:
        sink = ShardWriter(
            ShardsDir(config.out_root, program_id=config.program_id),
            rows_per_shard=config.rows_per_shard,
            codec=config.codec,
            write_final_partial=config.write_final_partial,
        )

    try:
        stats = BatchExtractService(extractor).run(
            load_transactions(config.input_path),
            sink=sink,
            batch_rows=config.batch_rows,
            skip_failed=config.skip_failed_transactions,
        )
    except ValidationError as e:
        raise click.ClickException(f"invalid transaction record in {config.input_path}: {e}") from e

    table = Table(title=f"[bold]{config.program_id}[/]")
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_row("[green]processed_ok[/]", str(stats.processed_ok))
    table.add_row("[red]processed_failed[/]", str(stats.processed_failed))
    table.add_row("[yellow]skipped[/]", str(stats.skipped_failed_tx))
    table.add_row("lines", str(stats.total_lines))
    table.add_row("events", str(stats.total_events))
    table.add_row("shards", str(stats.shards_written))
    console.print(table)


def main() -> None:
    cli()
