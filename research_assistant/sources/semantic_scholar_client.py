from __future__ import annotations

from typing import Any, Dict, List

from ..schemas import SearchProvider, SearchResultItem
from .base import ProviderClient
from .placeholders import placeholder_results

S2_SEARCH_API = "https://api.semanticscholar.org/graph/v1/paper/search"
S2_FIELDS = "title,abstract,authors,url,year,externalIds,citationCount,referenceCount,fieldsOfStudy"


class SemanticScholarClient(ProviderClient):
	provider = SearchProvider.SEMANTIC_SCHOLAR
	label = "Semantic Scholar"

	async def _search(self, query: str, limit: int) -> List[SearchResultItem]:
		params = {"query": query, "limit": limit, "fields": S2_FIELDS}
		headers: Dict[str, str] = {}
		if self._settings.semantic_scholar_api_key:
			headers["x-api-key"] = self._settings.semantic_scholar_api_key
		resp = await self._get(S2_SEARCH_API, params=params, headers=headers)
		papers: List[Dict[str, Any]] = resp.json().get("data") or []
		items: List[SearchResultItem] = []
		for paper in papers:
			if not paper.get("paperId"):
				continue
			item = SearchResultItem(
				id=paper["paperId"],
				source=self.provider,
				title=paper.get("title") or "",
				authors=[a["name"] for a in paper.get("authors") or [] if a.get("name")],
				abstract=paper.get("abstract"),
				url=paper.get("url"),
				year=paper.get("year"),
			)
			items.append(item)
			self._remember(item, paper)
		return items

	def _fallback(self, query: str, limit: int) -> List[SearchResultItem]:
		# primary provider: answer with placeholders rather than nothing
		return placeholder_results(query, limit)
