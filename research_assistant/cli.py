from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import get_settings
from .container import Services, build_services
from .exceptions import ResearchAssistantError
from .research import run_deep_research
from .schemas import AnalyzePaperRequest, DeepResearchRequest, SearchProvider, SearchResultItem, SummarizeRequest
from .utils.log import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()

T = TypeVar("T")


@app.callback()
def main(log_level: str = typer.Option(None, "--log-level", help="Override LOG_LEVEL")) -> None:
	configure_logging(log_level or get_settings().log_level)


def _run(action: Callable[[Services], Awaitable[T]], provider: Optional[str] = None) -> T:
	async def runner() -> T:
		services = build_services(get_settings(), provider_choice=provider)
		try:
			return await action(services)
		finally:
			await services.aclose()

	try:
		return asyncio.run(runner())
	except ResearchAssistantError as e:
		console.print(f"[red]Error ({e.status_code}):[/red] {e.message}")
		raise typer.Exit(code=1)


def _print_items(items: List[SearchResultItem]) -> None:
	table = Table(show_lines=False)
	table.add_column("#", justify="right")
	table.add_column("Title")
	table.add_column("Authors")
	table.add_column("Year")
	table.add_column("Source")
	table.add_column("ID")
	for idx, it in enumerate(items, start=1):
		authors = ", ".join(it.authors[:3]) + (" et al." if len(it.authors) > 3 else "") if it.authors else "Unknown"
		table.add_row(str(idx), it.title, authors, str(it.year or "n.d."), it.source.value, it.id)
	console.print(table)


@app.command()
def version() -> None:
	"""Show version."""
	console.print(f"Research Assistant v{__version__}")


@app.command()
def search(
	query: str = typer.Argument(..., help="Search query"),
	provider: SearchProvider = typer.Option(SearchProvider.SEMANTIC_SCHOLAR, "--provider", help="Provider to query"),
	limit: Optional[int] = typer.Option(None, "--limit", min=1, max=50, help="Maximum number of results (default DEFAULT_SEARCH_LIMIT)"),
) -> None:
	"""Search one provider or all of them."""
	resp = _run(lambda svc: svc.search.search(query, provider=provider, limit=limit))
	_print_items(resp.items)
	console.print(f"\n{len(resp.items)} of {resp.total_found or len(resp.items)} results from {', '.join(resp.sources or []) or 'placeholders'} in {resp.search_time} ms")


@app.command("deep-research")
def deep_research(
	topic: str = typer.Argument(..., help="Research topic"),
	max_sources: int = typer.Option(50, "--max-sources", min=10, max=200),
	depth: str = typer.Option("standard", "--depth", help="quick|standard|deep"),
	language: str = typer.Option("any", "--language", help="ru|en|any"),
) -> None:
	"""Federated search over every source."""
	req = DeepResearchRequest(topic=topic, max_sources=max_sources, research_depth=depth, language=language)
	resp = _run(lambda svc: run_deep_research(svc.search, req))
	_print_items(resp.papers)
	console.print(f"\n{resp.total_results} papers from {resp.total_sources} sources in {resp.search_time} ms")


@app.command()
def summarize(
	text: Optional[str] = typer.Option(None, "--text", help="Text to summarize"),
	paper_id: Optional[str] = typer.Option(None, "--paper-id", help="ID of a previously found paper"),
	url: Optional[str] = typer.Option(None, "--url"),
	user_id: str = typer.Option("cli", "--user-id"),
	provider: Optional[str] = typer.Option(None, "--llm", help="LLM provider: openai|together|ollama"),
) -> None:
	"""Summarize text or a cached paper and list related papers."""
	req = SummarizeRequest(paper_id=paper_id, text=text, url=url)
	resp = _run(lambda svc: svc.summarizer.summarize(req, user_id=user_id), provider=provider)
	console.rule("Summary")
	console.print(resp.summary)
	if resp.key_ideas:
		console.rule("Key ideas")
		for idea in resp.key_ideas:
			console.print(f"- {idea}")
	if resp.related_papers:
		console.rule("Related papers")
		for p in resp.related_papers:
			console.print(f"{p.title} ({p.source}) {p.url or ''}")


@app.command()
def analyze(
	abstract: str = typer.Option(..., "--abstract", help="Paper abstract"),
	title: str = typer.Option("", "--title"),
	paper_id: str = typer.Option("cli", "--id"),
	provider: Optional[str] = typer.Option(None, "--llm", help="LLM provider: openai|together|ollama"),
) -> None:
	"""Extract summary, keywords and topic from an abstract."""
	req = AnalyzePaperRequest(id=paper_id, source="cli", title=title, abstract=abstract)
	resp = _run(lambda svc: svc.analytics.analyze(req), provider=provider)
	console.print(f"[bold]Topic:[/bold] {resp.topic}")
	console.print(f"[bold]Keywords:[/bold] {', '.join(resp.key_words or [])}")
	console.print(resp.summary or "")


@app.command()
def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
	"""Start the API server."""
	import uvicorn

	uvicorn.run("research_assistant.api:create_app", host=host, port=port, reload=reload, factory=True)


@app.command()
def ui(port: int = 8501) -> None:
	"""Launch the Streamlit UI."""
	import subprocess

	cmd = [sys.executable, "-m", "streamlit", "run", str(Path(__file__).with_name("streamlit_app.py")), "--server.port", str(port)]
	env = os.environ.copy()
	subprocess.run(cmd, env=env, check=False)


if __name__ == "__main__":
	app()
