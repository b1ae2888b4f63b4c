from __future__ import annotations

from typing import Any, Dict, List

from ..schemas import SearchProvider, SearchResultItem
from ..utils.text import extract_year
from .base import ProviderClient

EUTILS_BASE = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
ESEARCH_API = f"{EUTILS_BASE}/esearch.fcgi"
ESUMMARY_API = f"{EUTILS_BASE}/esummary.fcgi"
PUBMED_ARTICLE_URL = "https://pubmed.ncbi.nlm.nih.gov/{pmid}/"


class PubMedClient(ProviderClient):
	provider = SearchProvider.PUBMED
	label = "PubMed"

	def _ncbi_params(self) -> Dict[str, Any]:
		params: Dict[str, Any] = {"db": "pubmed", "retmode": "json"}
		if self._settings.ncbi_api_key:
			params["api_key"] = self._settings.ncbi_api_key
		if self._settings.ncbi_email:
			params["email"] = self._settings.ncbi_email
		return params

	async def _search(self, query: str, limit: int) -> List[SearchResultItem]:
		search_resp = await self._get(ESEARCH_API, params={**self._ncbi_params(), "term": query, "retmax": limit})
		ids: List[str] = (search_resp.json().get("esearchresult") or {}).get("idlist") or []
		if not ids:
			return []

		summary_resp = await self._get(ESUMMARY_API, params={**self._ncbi_params(), "id": ",".join(ids)})
		articles: Dict[str, Any] = summary_resp.json().get("result") or {}
		items: List[SearchResultItem] = []
		for pmid in ids:
			article = articles.get(pmid)
			if not article:
				continue
			item = SearchResultItem(
				id=f"pubmed:{pmid}",
				source=self.provider,
				title=article.get("title") or "",
				authors=[a["name"] for a in article.get("authors") or [] if a.get("name")],
				abstract=article.get("abstract"),
				url=PUBMED_ARTICLE_URL.format(pmid=pmid),
				year=extract_year(article.get("pubdate")),
			)
			items.append(item)
			self._remember(item, article)
		return items
