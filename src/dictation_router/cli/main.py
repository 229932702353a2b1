"""CLI for dictation-router: templates / categorize / suggest / entities / ai-categorize / note."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dictation_router.classification.entity_extractor import extract_clinical_entities
from dictation_router.core.config import AppSettings
from dictation_router.domains.clinical.catalog import DEFAULT_TEMPLATES, get_template, load_templates
from dictation_router.exceptions import DictationRouterError
from dictation_router.hooks import InMemoryUsageTracker
from dictation_router.models import Template
from dictation_router.services.categorization_service import create_categorization_service

app = typer.Typer(name="dictation-router", help="Route clinical dictation into note templates")
console = Console()
err_console = Console(stderr=True)


def _build_settings(api_key: Optional[str], model: Optional[str]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    overrides: dict[str, str] = {}
    if api_key:
        overrides["api_key"] = api_key
    if model:
        overrides["model"] = model
    if overrides:
        settings.llm = settings.llm.model_copy(update=overrides)
    return settings


def _read_text(transcript: Path) -> str:
    return transcript.read_text(encoding="utf-8")


def _templates(template_file: Optional[Path]) -> list[Template]:
    return load_templates(template_file) if template_file else list(DEFAULT_TEMPLATES)


def _pick_template(template_id: str, template_file: Optional[Path]) -> Template:
    try:
        return get_template(template_id, tuple(_templates(template_file)))
    except KeyError as exc:
        raise typer.BadParameter(f"Unknown template {template_id!r}") from exc


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command()
def templates(
    template_file: Optional[Path] = typer.Option(None, "--template-file", help="JSON templates"),
) -> None:
    """List available templates and their sections."""
    table = Table(title="Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Sections")
    for template in _templates(template_file):
        table.add_row(
            template.id,
            template.name,
            ", ".join(f"{s.id} ({s.type.value})" for s in template.sections),
        )
    console.print(table)


@app.command()
def categorize(
    transcript: Path = typer.Argument(..., help="Text file with the transcription"),
    template_id: str = typer.Option("general-consultation", "--template", "-t"),
    template_file: Optional[Path] = typer.Option(None, "--template-file"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Rule-based categorization into template sections."""
    _configure_logging(verbose)
    template = _pick_template(template_id, template_file)
    service = create_categorization_service(AppSettings())
    groups = service.categorize(_read_text(transcript), template)

    if as_json:
        typer.echo(json.dumps([g.model_dump(by_alias=True) for g in groups], indent=2))
        return

    titles = {s.id: s.title for s in template.sections}
    table = Table(title=f"Categorized into {template.name}")
    table.add_column("Section", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Content", max_width=80)
    for group in groups:
        table.add_row(
            titles.get(group.section_id, group.section_id),
            f"{group.confidence:.2f}",
            group.suggested_content,
        )
    console.print(table)
    if not groups:
        console.print("[yellow]No fragment cleared the confidence floor.[/yellow]")


@app.command()
def suggest(
    transcript: Path = typer.Argument(..., help="Text file with the transcription"),
    template_file: Optional[Path] = typer.Option(None, "--template-file"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Suggest the best-fitting template."""
    service = create_categorization_service(AppSettings())
    suggestion = service.suggest_template(_read_text(transcript), _templates(template_file))

    if as_json:
        typer.echo(json.dumps(suggestion.model_dump(by_alias=True) if suggestion else None))
        return
    if suggestion is None:
        console.print("[yellow]No template matched.[/yellow]")
        return
    console.print(f"[bold]Template:[/bold] {suggestion.template_id}")
    console.print(f"[bold]Confidence:[/bold] {suggestion.confidence:.2f}")
    if suggestion.reasoning:
        console.print(f"[bold]Reasoning:[/bold] {', '.join(suggestion.reasoning)}")


@app.command()
def entities(
    transcript: Path = typer.Argument(..., help="Text file with the transcription"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Extract medications, vital signs, procedures, devices and symptom severity."""
    found = extract_clinical_entities(_read_text(transcript))

    if as_json:
        typer.echo(found.model_dump_json(by_alias=True, indent=2))
        return

    table = Table(title="Entities")
    table.add_column("Type", style="cyan")
    table.add_column("Text", style="green")
    table.add_column("Details")
    table.add_column("Confidence", justify="right")
    for entity in found.entities:
        details = entity.details.model_dump(exclude_none=True) if entity.details else {}
        table.add_row(
            entity.type,
            entity.text,
            ", ".join(f"{k}={v}" for k, v in details.items()),
            f"{entity.confidence:.2f}",
        )
    console.print(table)
    for assessment in found.symptom_severity:
        console.print(f"{assessment.symptom}: {assessment.severity} ({assessment.confidence:.2f})")


@app.command("ai-categorize")
def ai_categorize(
    transcript: Path = typer.Argument(..., help="Text file with the transcription"),
    template_id: str = typer.Option("general-consultation", "--template", "-t"),
    template_file: Optional[Path] = typer.Option(None, "--template-file"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Chat-completion API key"),
    model: Optional[str] = typer.Option(None, "--model"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """LLM-assisted categorization with ICD-10 codes (prints JSON)."""
    _configure_logging(verbose)
    template = _pick_template(template_id, template_file)
    service = create_categorization_service(_build_settings(api_key, model))

    try:
        result = asyncio.run(service.ai_categorize(_read_text(transcript), template))
    except DictationRouterError as exc:
        err_console.print(f"[red]{type(exc).__name__}: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    typer.echo(result.model_dump_json(by_alias=True, indent=2))


@app.command()
def note(
    transcript: Path = typer.Argument(..., help="Text file with the transcription"),
    template_id: str = typer.Option("general-consultation", "--template", "-t"),
    template_file: Optional[Path] = typer.Option(None, "--template-file"),
    rules_only: bool = typer.Option(False, "--rules-only", help="Skip the LLM path"),
    api_key: Optional[str] = typer.Option(None, "--api-key"),
    model: Optional[str] = typer.Option(None, "--model"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Categorize with the LLM when available, falling back to rules (prints JSON)."""
    _configure_logging(verbose)
    template = _pick_template(template_id, template_file)
    tracker = InMemoryUsageTracker()
    service = create_categorization_service(_build_settings(api_key, model), usage_tracker=tracker)

    try:
        result = asyncio.run(
            service.categorize_note(_read_text(transcript), template, prefer_ai=not rules_only)
        )
    except DictationRouterError as exc:
        err_console.print(f"[red]{type(exc).__name__}: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    typer.echo(result.model_dump_json(by_alias=True, indent=2))
    usage = tracker.summary()
    if usage.request_count:
        err_console.print(
            f"[dim]Estimated tokens: {usage.categorization_tokens}, "
            f"cost: ${usage.total_cost:.4f}[/dim]"
        )


if __name__ == "__main__":
    app()
