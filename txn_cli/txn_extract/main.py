"""txn-parse CLI entrypoint."""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable, Sequence
from decimal import Decimal
from io import StringIO
from pathlib import Path

import click

from txn_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context
from txn_cli.shared.config import ParsingSettings

from .formats import FRIENDLY_NAMES, detect_format
from .normalizer import normalize_text
from .parser import parse_batch, parse_transaction
from .types import ParsedTransaction
from .validator import validate_transactions

CSV_HEADER = ["date", "description", "amount", "balance"]


class ParseDefaultGroup(click.Group):
    """Click group that falls back to a default command when none is provided."""

    def __init__(self, *args, default_command: str | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._default_command = default_command

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if self._default_command is None:
            return super().resolve_command(ctx, args)

        if not args:
            return super().resolve_command(ctx, [self._default_command])

        cmd = super().get_command(ctx, args[0])
        if cmd is not None:
            return super().resolve_command(ctx, args)

        return super().resolve_command(ctx, [self._default_command] + args)


@click.group(
    help="Parse bank statement text into structured transactions.",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    cls=ParseDefaultGroup,
    default_command="parse",
)
@common_cli_options
@handle_cli_errors
def main(cli_ctx: CLIContext) -> None:
    return


_input_argument = click.argument(
    "input_file", type=click.Path(allow_dash=True, dir_okay=False, path_type=str), default="-"
)
_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "csv"], case_sensitive=False),
    help="Output format (default: from config or 'json').",
)
_output_option = click.option(
    "--output", "output_path", type=click.Path(dir_okay=False, path_type=str), help="Write output to file."
)
_strict_option = click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on text with no format markers instead of guessing the compact format.",
)


@main.command("parse")
@_input_argument
@_format_option
@_output_option
@_strict_option
@handle_cli_errors
@pass_cli_context
def parse_command(
    cli_ctx: CLIContext,
    input_file: str,
    output_format: str | None,
    output_path: str | None,
    strict: bool | None,
) -> None:
    """Parse a single transaction (reads stdin when INPUT_FILE is '-' or omitted)."""

    text = _read_input(input_file)
    settings = _parsing_settings(cli_ctx, strict)
    transaction = parse_transaction(
        text,
        strict_fallback=settings.strict_fallback,
        allowed_formats=settings.enabled_formats,
    )
    cli_ctx.logger.debug(f"Parsed transaction from {_describe_source(input_file)}")

    if cli_ctx.dry_run:
        _emit_dry_run_summary(cli_ctx, [transaction], skipped=0)
        return

    _write_output([transaction], _resolve_format(cli_ctx, output_format), output_path, cli_ctx)


@main.command("batch")
@_input_argument
@_format_option
@_output_option
@_strict_option
@click.option(
    "--validate/--no-validate",
    "run_validation",
    default=None,
    help="Check balances and amounts after parsing (default: from config).",
)
@handle_cli_errors
@pass_cli_context
def batch_command(
    cli_ctx: CLIContext,
    input_file: str,
    output_format: str | None,
    output_path: str | None,
    strict: bool | None,
    run_validation: bool | None,
) -> None:
    """Parse blank-line separated transactions, skipping blocks that fail."""

    text = _read_input(input_file)
    settings = _parsing_settings(cli_ctx, strict)
    result = parse_batch(
        text,
        strict_fallback=settings.strict_fallback,
        allowed_formats=settings.enabled_formats,
    )

    if result.skipped:
        cli_ctx.logger.warning(f"Skipped {len(result.skipped)} block(s) that could not be parsed.")
        for skipped in result.skipped:
            cli_ctx.logger.debug(f"  block {skipped.index}: {skipped.reason}")
    if result.used_whole_text_fallback:
        cli_ctx.logger.info("No block parsed on its own; the whole input was parsed as one transaction.")

    should_validate = cli_ctx.config.output.validate if run_validation is None else run_validation
    if should_validate:
        report = validate_transactions(result.transactions)
        for issue in report.issues:
            emit = cli_ctx.logger.warning if issue.severity == "warning" else cli_ctx.logger.error
            emit(f"[{issue.code}] {issue.message}")

    if cli_ctx.dry_run:
        _emit_dry_run_summary(cli_ctx, result.transactions, skipped=len(result.skipped))
        return

    _write_output(result.transactions, _resolve_format(cli_ctx, output_format), output_path, cli_ctx)


@main.command("detect")
@_input_argument
@_strict_option
@handle_cli_errors
@pass_cli_context
def detect_command(cli_ctx: CLIContext, input_file: str, strict: bool | None) -> None:
    """Report which statement format the text would be parsed as."""

    normalized = normalize_text(_read_input(input_file))
    settings = _parsing_settings(cli_ctx, strict)
    detection = detect_format(
        normalized,
        strict=settings.strict_fallback,
        allowed_formats=settings.enabled_formats,
    )
    click.echo(f"Format: {FRIENDLY_NAMES[detection.format]} ({detection.format.value})")
    click.echo(f"Reason: {detection.reason}")
    if detection.is_fallback:
        cli_ctx.logger.warning("No format markers matched; the compact format is only a guess.")


def _read_input(input_file: str) -> str:
    with click.open_file(input_file, "r", encoding="utf-8") as handle:
        return handle.read()


def _describe_source(input_file: str) -> str:
    return "stdin" if input_file == "-" else input_file


def _parsing_settings(cli_ctx: CLIContext, strict: bool | None) -> ParsingSettings:
    """Return the parsing settings with a command-line --strict/--no-strict applied."""
    config = cli_ctx.config if strict is None else cli_ctx.config.with_strict_fallback(strict)
    return config.parsing


def _resolve_format(cli_ctx: CLIContext, output_format: str | None) -> str:
    return (output_format or cli_ctx.config.output.format).lower()


def _emit_dry_run_summary(
    cli_ctx: CLIContext,
    transactions: Sequence[ParsedTransaction],
    *,
    skipped: int,
) -> None:
    cli_ctx.logger.info("Dry run summary:")
    cli_ctx.logger.info(f"  Transactions: {len(transactions)}")
    cli_ctx.logger.info(f"  Skipped blocks: {skipped}")
    if transactions:
        dates = sorted(txn.date for txn in transactions)
        cli_ctx.logger.info(f"  Date range: {dates[0].isoformat()} to {dates[-1].isoformat()}")
        total = sum((txn.amount for txn in transactions), Decimal("0"))
        cli_ctx.logger.info(f"  Net amount: {total:.2f}")


def _write_output(
    transactions: Sequence[ParsedTransaction],
    output_format: str,
    output_path: str | None,
    cli_ctx: CLIContext,
) -> None:
    if output_format == "csv":
        rendered = _render_csv(transactions)
    else:
        rendered = json.dumps(
            [txn.to_dict() for txn in transactions], indent=2, ensure_ascii=False
        )

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(rendered + "\n", encoding="utf-8")
        cli_ctx.logger.success(
            f"Wrote {len(transactions)} transaction(s) to {output_file} ({output_format})."
        )
    else:
        click.echo(rendered)


def _render_csv(transactions: Iterable[ParsedTransaction]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for txn in transactions:
        row = txn.to_dict()
        writer.writerow([row[column] for column in CSV_HEADER])
    return buffer.getvalue().strip()


if __name__ == "__main__":  # pragma: no cover
    main()
