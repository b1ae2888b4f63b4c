from __future__ import annotations

from typing import Any, Dict, List

import feedparser

from ..schemas import SearchProvider, SearchResultItem
from ..utils.text import collapse_whitespace, extract_year
from .base import ProviderClient

ARXIV_API = "http://export.arxiv.org/api/query"


def parse_feed(feed_text: str, limit: int) -> List[Dict[str, Any]]:
	"""Atom feed to plain records; entries lacking a title or an id are skipped."""
	feed = feedparser.parse(feed_text)
	records: List[Dict[str, Any]] = []
	for entry in feed.entries[:limit]:
		entry_id = (entry.get("id") or "").strip()
		title = collapse_whitespace(entry.get("title"))
		if not entry_id or not title:
			continue
		records.append(
			{
				"id": entry_id,
				"title": title,
				"summary": collapse_whitespace(entry.get("summary")) or None,
				"authors": [a.get("name") for a in entry.get("authors", []) if a.get("name")],
				"published": entry.get("published"),
			}
		)
	return records


class ArxivClient(ProviderClient):
	provider = SearchProvider.ARXIV
	label = "arXiv"

	async def _search(self, query: str, limit: int) -> List[SearchResultItem]:
		params = {
			"search_query": f"all:{query}",
			"start": 0,
			"max_results": limit,
			"sortBy": "relevance",
		}
		resp = await self._get(ARXIV_API, params=params)
		items: List[SearchResultItem] = []
		for rec in parse_feed(resp.text, limit):
			item = SearchResultItem(
				id=rec["id"].rstrip("/").split("/")[-1],
				source=self.provider,
				title=rec["title"],
				authors=rec["authors"],
				abstract=rec["summary"],
				url=rec["id"],
				year=extract_year(rec["published"]),
			)
			items.append(item)
			self._remember(item, rec)
		return items
