from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..schemas import SearchProvider, SearchResultItem
from ..utils.text import extract_year, join_name_parts, strip_markup
from .base import ProviderClient

CROSSREF_API = "https://api.crossref.org/works"


def _extract_year(item: Dict[str, Any]) -> Optional[int]:
	published = item.get("published") or {}
	parts = published.get("date-parts") or []
	if parts and parts[0]:
		return extract_year(parts[0][0])
	return None


class CrossrefClient(ProviderClient):
	provider = SearchProvider.CROSSREF
	label = "CrossRef"

	async def _search(self, query: str, limit: int) -> List[SearchResultItem]:
		params: Dict[str, Any] = {"query": query, "rows": limit, "sort": "relevance", "order": "desc"}
		if self._settings.crossref_mailto:
			params["mailto"] = self._settings.crossref_mailto
		resp = await self._get(CROSSREF_API, params=params)
		works = (resp.json().get("message") or {}).get("items") or []
		items: List[SearchResultItem] = []
		for it in works:
			external_id = it.get("DOI") or it.get("URL")
			if not external_id:
				continue
			authors = [a.get("name") or join_name_parts([a.get("given"), a.get("family")]) for a in it.get("author") or []]
			item = SearchResultItem(
				id=external_id,
				source=self.provider,
				title=(it.get("title") or [""])[0],
				authors=[a for a in authors if a],
				abstract=strip_markup(it.get("abstract")),
				url=it.get("URL"),
				year=_extract_year(it),
			)
			items.append(item)
			self._remember(item, it)
		return items
