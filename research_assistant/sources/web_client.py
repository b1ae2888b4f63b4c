from __future__ import annotations

from typing import List

from loguru import logger

from ..schemas import SearchProvider, SearchResultItem
from .base import ProviderClient


class WebSearchClient(ProviderClient):
	provider = SearchProvider.WEB_SEARCH
	label = "Web search"

	async def _search(self, query: str, limit: int) -> List[SearchResultItem]:
		# TODO: back this with a real web search API (Bing or similar) once a key is provisioned
		logger.warning("Web search not implemented yet")
		return []
