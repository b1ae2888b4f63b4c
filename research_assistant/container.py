"""Builds every service from settings and hands dependencies in explicitly.

There is no module-level client state: the API lifespan, the CLI and tests
each build their own ``Services``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from .analytics import AnalyticsService
from .config import AppSettings
from .llm.providers import LLMProvider, get_default_llm_provider
from .schemas import SearchProvider
from .search import FederatedSearch
from .sources import ArxivClient, CrossrefClient, ProviderClient, PubMedClient, SemanticScholarClient, WebSearchClient
from .storage.db import Database
from .storage.paper_cache import PaperCache
from .storage.summary_store import SummaryStore
from .summarize import SummarizeService


@dataclass
class Services:
	settings: AppSettings
	db: Database
	papers: PaperCache
	summaries: SummaryStore
	search: FederatedSearch
	summarizer: SummarizeService
	analytics: AnalyticsService

	async def aclose(self) -> None:
		await self.papers.flush()
		self.db.dispose()


def build_provider_clients(
	settings: AppSettings,
	cache: Optional[PaperCache] = None,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[SearchProvider, ProviderClient]:
	classes = [SemanticScholarClient, ArxivClient, PubMedClient, CrossrefClient, WebSearchClient]
	return {cls.provider: cls(settings, cache=cache, transport=transport) for cls in classes}


def build_services(
	settings: AppSettings,
	llm: Optional[LLMProvider] = None,
	transport: Optional[httpx.AsyncBaseTransport] = None,
	provider_choice: Optional[str] = None,
) -> Services:
	db = Database(settings.database_url)
	db.create_all()
	papers = PaperCache(db)
	summaries = SummaryStore(db)
	search = FederatedSearch(
		build_provider_clients(settings, cache=papers, transport=transport),
		default_limit=settings.default_search_limit,
	)
	model = llm or get_default_llm_provider(settings, provider_choice)
	return Services(
		settings=settings,
		db=db,
		papers=papers,
		summaries=summaries,
		search=search,
		summarizer=SummarizeService(settings, model, search, papers, summaries),
		analytics=AnalyticsService(settings, model),
	)
