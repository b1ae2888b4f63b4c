from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from ..config import AppSettings
from ..schemas import SearchProvider, SearchResultItem
from ..storage.paper_cache import PaperCache


class ProviderClient:
	"""Shared plumbing for the provider adapters.

	Subclasses implement ``_search``; ``search`` wraps it so that no provider
	error ever reaches the caller.
	"""

	provider: SearchProvider
	label: str = ""

	def __init__(
		self,
		settings: AppSettings,
		cache: Optional[PaperCache] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self._settings = settings
		self._cache = cache
		self._transport = transport

	def _client(self, **kwargs: Any) -> httpx.AsyncClient:
		return httpx.AsyncClient(
			timeout=httpx.Timeout(self._settings.provider_timeout),
			headers={"User-Agent": self._settings.user_agent, **kwargs.pop("headers", {})},
			transport=self._transport,
			**kwargs,
		)

	async def _get(self, url: str, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> httpx.Response:
		async with self._client(headers=headers or {}, follow_redirects=True) as client:
			resp = await client.get(url, params=params)
			resp.raise_for_status()
			return resp

	def _remember(self, item: SearchResultItem, raw: Any = None) -> None:
		if self._cache is None:
			return
		try:
			self._cache.store_in_background(item, raw)
		except Exception as e:
			logger.error(f"Error scheduling cache write for {item.id}: {e}")

	async def _search(self, query: str, limit: int) -> List[SearchResultItem]:
		raise NotImplementedError

	def _fallback(self, query: str, limit: int) -> List[SearchResultItem]:
		return []

	async def search(self, query: str, limit: int) -> List[SearchResultItem]:
		try:
			items = await self._search(query, limit)
		except Exception as e:
			logger.error(f"Error searching {self.label}: {e}")
			if isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 429:
				logger.warning(f"Rate limit exceeded for {self.label}")
			return self._fallback(query, limit)
		logger.debug(f"{self.label} returned {len(items)} results for query='{query}'")
		return items
