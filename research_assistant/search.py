from __future__ import annotations

import asyncio
import functools
import math
import time
from typing import Dict, List, Mapping, Optional, Sequence, Set

from loguru import logger

from .schemas import SearchProvider, SearchResponse, SearchResultItem
from .sources.base import ProviderClient
from .sources.placeholders import placeholder_results
from .utils.text import query_tokens, title_key

DEFAULT_PROVIDER = SearchProvider.SEMANTIC_SCHOLAR

# Order matters: it is the dedupe precedence and the order of ``sources``.
FANOUT_PROVIDERS = (
	SearchProvider.SEMANTIC_SCHOLAR,
	SearchProvider.ARXIV,
	SearchProvider.PUBMED,
	SearchProvider.CROSSREF,
)


def per_source_limit(limit: int) -> int:
	return math.ceil(limit / len(FANOUT_PROVIDERS))


def deduplicate_items(items: Sequence[SearchResultItem]) -> List[SearchResultItem]:
	seen: Set[str] = set()
	unique: List[SearchResultItem] = []
	for item in items:
		key = title_key(item.title)
		if key in seen:
			continue
		seen.add(key)
		unique.append(item)
	return unique


def relevance_score(item: SearchResultItem, tokens: Sequence[str]) -> float:
	title = (item.title or "").lower()
	abstract = (item.abstract or "").lower()
	score = 0.0
	for word in tokens:
		if word in title:
			score += 2
		if word in abstract:
			score += 1
	return score


def rank_items(items: Sequence[SearchResultItem], query: str) -> List[SearchResultItem]:
	tokens = query_tokens(query)

	def compare(a: SearchResultItem, b: SearchResultItem) -> float:
		score_a = relevance_score(a, tokens)
		score_b = relevance_score(b, tokens)
		# recency only counts when both sides know their year
		if a.year and b.year:
			score_a += (a.year - 2020) * 0.1
			score_b += (b.year - 2020) * 0.1
		return score_b - score_a

	return sorted(items, key=functools.cmp_to_key(compare))


class FederatedSearch:
	"""Fans a query out to the provider clients and merges what comes back."""

	def __init__(self, clients: Mapping[SearchProvider, ProviderClient], default_limit: int = 10) -> None:
		self._clients: Dict[SearchProvider, ProviderClient] = dict(clients)
		self.default_limit = default_limit

	def client_for(self, provider: Optional[SearchProvider]) -> ProviderClient:
		if provider is not None and provider in self._clients:
			return self._clients[provider]
		return self._clients[DEFAULT_PROVIDER]

	async def search(self, query: str, provider: Optional[SearchProvider] = None, limit: Optional[int] = None) -> SearchResponse:
		started = time.perf_counter()
		limit = limit or self.default_limit
		try:
			if provider == SearchProvider.ALL_SOURCES:
				response = await self.search_all_sources(query, limit)
			else:
				client = self.client_for(provider)
				items = await client.search(query, limit)
				response = SearchResponse(items=items[:limit], sources=[client.provider.value])
		except Exception as e:
			logger.error(f"Error in search: {e}")
			response = self.placeholder_response(query, limit)
		response.search_time = int((time.perf_counter() - started) * 1000)
		return response

	async def search_all_sources(self, query: str, limit: int) -> SearchResponse:
		sub_limit = per_source_limit(limit)
		dispatched = [p for p in FANOUT_PROVIDERS if p in self._clients]
		web = self._clients.get(SearchProvider.WEB_SEARCH)
		coros = [self._clients[p].search(query, sub_limit) for p in dispatched]
		if web is not None:
			# awaited for parity but never merged into items or sources
			coros.append(web.search(query, sub_limit))
		results = await asyncio.gather(*coros, return_exceptions=True)

		all_items: List[SearchResultItem] = []
		sources: List[str] = []
		for provider, res in zip(dispatched, results):
			if isinstance(res, BaseException):
				logger.warning(f"{provider.value} failed during federated search: {res}")
				continue
			all_items.extend(res)
			sources.append(provider.value)

		if not sources:
			logger.error(f"All providers failed for query='{query}'; returning placeholder results")
			return self.placeholder_response(query, limit)

		unique = deduplicate_items(all_items)
		ranked = rank_items(unique, query)
		return SearchResponse(items=ranked[:limit], total_found=len(unique), sources=sources)

	@staticmethod
	def placeholder_response(query: str, limit: int) -> SearchResponse:
		items = placeholder_results(query, limit)
		return SearchResponse(items=items, total_found=len(items), sources=[])
