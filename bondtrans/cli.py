"""
Command-line interface for bondtrans.

Developer tooling around the translation pipeline:
- Translating saved Cbonds responses
- Inspecting the term dictionary
- Inspecting the field policy

Usage:
    bondtrans translate emissions.json --kind bond-emission --lang zh
    bondtrans translate - --kind issuer --lang cht < emitent.json
    bondtrans terms --search bond
    bondtrans policy --kind issuer
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bondtrans import __version__
from bondtrans.models import EntityKind, TargetLanguage, parse_language
from bondtrans.pipeline import PipelineConfig, TranslationPipeline
from bondtrans.policy import DEFAULT_POLICY, parse_entity_kind
from bondtrans.translate.terms import get_default_terms, load_terms_csv

app = typer.Typer(
    name="bondtrans",
    help="bondtrans: translate bond-market API responses into Chinese",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"bondtrans v{__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """bondtrans: field translation for bond-market data."""
    pass


async def _translate_payload(
    config: PipelineConfig,
    payload: Any,
    kind: EntityKind,
    language: TargetLanguage,
) -> tuple[Any, dict[str, int]]:
    async with TranslationPipeline(config) as pipeline:
        result = await pipeline.translate_payload(payload, kind, language)
        return result, pipeline.get_stats()


@app.command()
def translate(
    input_file: str = typer.Argument(
        ...,
        help="JSON file with a Cbonds response, or '-' for stdin",
    ),
    kind: str = typer.Option(
        "bond-emission", "--kind", "-k",
        help="Entity kind (bond-emission, issuer)",
    ),
    lang: str = typer.Option(
        "zh", "--lang", "-l",
        help="Target language (eng, zh, zh-cn, cht, zh-tw)",
    ),
    variant: Optional[str] = typer.Option(
        None, "--variant",
        help="Chinese variant for 'zh' (simplified, traditional)",
    ),
    backend: Optional[str] = typer.Option(
        None, "--backend", "-b",
        help="Remote translator (ftapi, mymemory, dummy, none); defaults to BONDTRANS_BACKEND or ftapi",
    ),
    terms_file: Optional[Path] = typer.Option(
        None, "--terms", "-t",
        help="Extra terms CSV (source,target[,category])",
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write translated JSON here instead of stdout",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V",
        help="Log every remote call",
    ),
):
    """Translate a saved API response."""
    setup_logging(verbose)
    load_dotenv()

    try:
        config = PipelineConfig.from_env()
        entity_kind = parse_entity_kind(kind)
        language = parse_language(lang, variant)
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(2)

    if backend:
        config.translator_backend = backend
    if terms_file:
        config.terms_file = terms_file

    try:
        raw = sys.stdin.read() if input_file == "-" else Path(input_file).read_text(encoding="utf-8")
        payload = json.loads(raw)
    except OSError as e:
        err_console.print(f"[red]Cannot read input:[/] {e}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid JSON:[/] {e}")
        raise typer.Exit(1)

    try:
        result, stats = asyncio.run(_translate_payload(config, payload, entity_kind, language))
    except (ValueError, TypeError, OSError) as e:
        err_console.print(f"[red]Translation failed:[/] {e}")
        raise typer.Exit(1)

    rendered = json.dumps(result, ensure_ascii=False, indent=2)
    if output_file:
        output_file.write_text(rendered + "\n", encoding="utf-8")
        err_console.print(f"[green]✓[/] Wrote {output_file}")
    else:
        typer.echo(rendered)

    err_console.print(
        f"[dim]Remote calls: {stats['requests']} "
        f"(succeeded {stats['succeeded']}, failed {stats['failed']}, skipped {stats['skipped']})[/]"
    )


@app.command()
def terms(
    search: Optional[str] = typer.Option(
        None, "--search", "-s",
        help="Only show terms containing this text",
    ),
    terms_file: Optional[Path] = typer.Option(
        None, "--terms", "-t",
        help="Extra terms CSV merged over the built-in table",
    ),
):
    """List the term dictionary."""
    dictionary = get_default_terms()
    if terms_file:
        try:
            dictionary = dictionary.merge(load_terms_csv(terms_file))
        except OSError as e:
            err_console.print(f"[red]Cannot read terms file:[/] {e}")
            raise typer.Exit(1)

    entries = dictionary.search(search) if search else list(dictionary)
    if not entries:
        console.print(f"[yellow]No terms match {search!r}[/]")
        return

    table = Table(title=f"Term Dictionary ({dictionary.name})")
    table.add_column("English", style="cyan")
    table.add_column("Chinese", style="green")
    table.add_column("Category", style="dim")
    for entry in entries:
        table.add_row(entry.source, entry.target, entry.category)

    console.print(table)
    console.print(f"[dim]{len(entries)} of {len(dictionary)} terms[/]")


@app.command()
def policy(
    kind: Optional[str] = typer.Option(
        None, "--kind", "-k",
        help="Only show this entity kind",
    ),
):
    """Show which fields are translated for each entity kind."""
    try:
        kinds = [parse_entity_kind(kind)] if kind else list(DEFAULT_POLICY.kinds)
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(2)

    table = Table(title="Field Translation Policy")
    table.add_column("Entity kind", style="cyan")
    table.add_column("Field", style="green")
    table.add_column("Mode", style="yellow")
    for entity_kind in kinds:
        for rule in DEFAULT_POLICY.fields_for(entity_kind):
            table.add_row(entity_kind.value, rule.field, rule.mode.value)

    console.print(table)


if __name__ == "__main__":
    app()
