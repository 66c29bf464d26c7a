from __future__ import annotations

import dataclasses
import json
import logging
import random
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from .config import Settings
from .engine import analyze_text, generate_follow_up_questions
from .errors import EnrichmentError
from .graph.insights import keyword_questions
from .graph.lookup import KnowledgeGraphClient


app = typer.Typer(add_completion=False, help="Answer Graph: turn answer text into an entity graph with insights.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline decisions to stderr")):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _read_text(text: str | None, file: Path | None) -> str:
    if file is not None:
        return file.read_text(encoding="utf-8", errors="replace")
    if text is not None:
        return text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise typer.BadParameter("Provide TEXT, --file, or pipe text on stdin")


def _settings(no_enrich: bool) -> Settings:
    settings = Settings()
    if no_enrich:
        settings = dataclasses.replace(settings, enrich=False)
    return settings


@app.command()
def analyze(
    text: str | None = typer.Argument(None, help="Answer text to analyze"),
    file: Path | None = typer.Option(None, "--file", exists=True, file_okay=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    seed: int | None = typer.Option(None, help="Seed for same-cluster edge sampling"),
    no_enrich: bool = typer.Option(False, "--no-enrich", help="Skip knowledge-graph lookups"),
):
    """Build the entity graph and insights for a block of text."""
    body = _read_text(text, file)
    decide = random.Random(seed).random if seed is not None else None
    result = analyze_text(body, settings=_settings(no_enrich), decide=decide)

    if as_json:
        console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))
        return

    if result.summary:
        console.print(result.summary, markup=False)
    console.print(f"source: {result.metadata.source}", style="dim", markup=False)

    table = Table(title=f"Nodes ({result.metadata.entity_count})")
    table.add_column("id")
    table.add_column("label")
    table.add_column("type")
    table.add_column("cluster", justify="right")
    table.add_column("size", justify="right")
    table.add_column("score", justify="right")
    for n in result.graph.nodes:
        table.add_row(
            Text(n.id),
            Text(n.label, style=n.color),
            Text(n.type),
            Text(str(n.cluster)),
            Text(f"{n.size:.1f}"),
            Text(f"{n.score:.3f}"),
        )
    console.print(table)

    if result.graph.edges:
        console.print("edges:", markup=False)
        for e in result.graph.edges:
            console.print(f"- {e.source} -- {e.target} ({e.relationship}, w={e.weight})", markup=False)

    console.print("\nquestions:", markup=False)
    for q in result.insights.questions:
        console.print(f"- {q}", markup=False)
    console.print("gaps:", markup=False)
    for g in result.insights.gaps:
        console.print(f"- {g}", markup=False)
    for c in result.insights.clusters:
        console.print(f"{c.label}: {', '.join(c.concepts)}", markup=False)


@app.command()
def questions(
    text: str | None = typer.Argument(None, help="Answer text"),
    file: Path | None = typer.Option(None, "--file", exists=True, file_okay=True, dir_okay=False),
    no_enrich: bool = typer.Option(False, "--no-enrich", help="Skip knowledge-graph lookups"),
    basic: bool = typer.Option(False, "--basic", help="Keyword-triggered questions only, no graph"),
):
    """Print suggested follow-up questions only."""
    body = _read_text(text, file)
    qs = keyword_questions(body) if basic else generate_follow_up_questions(body, settings=_settings(no_enrich))
    for q in qs:
        console.print(f"- {q}", markup=False)


@app.command()
def doctor():
    """Check enrichment configuration and print actionable fixes."""
    settings = Settings()
    ok = True

    console.print("Knowledge graph lookups:")
    if not settings.enrich:
        console.print("- Disabled (ANSWERGRAPH_ENRICH=0); local analysis only.", style="yellow")
    elif not settings.kg_api_key.strip():
        console.print("- No API key; local analysis only.", style="yellow")
        console.print("  Fix: set ANSWERGRAPH_KG_API_KEY (or GOOGLE_API_KEY) in your env or .env", style="yellow")
    else:
        client = KnowledgeGraphClient(
            api_key=settings.kg_api_key,
            base_url=settings.kg_base_url,
            timeout_s=settings.kg_timeout_s,
        )
        try:
            client.ping()
            console.print(f"- Reachable at {settings.kg_base_url}", style="green")
        except EnrichmentError as e:
            console.print(f"- Not usable: {e}", style="red", markup=False)
            console.print("  Fix: check the key has the Knowledge Graph Search API enabled.", style="yellow")
            ok = False

    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
