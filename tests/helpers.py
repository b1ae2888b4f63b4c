"""Test doubles shared across the suite."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from research_assistant.schemas import SearchProvider, SearchResultItem


def make_item(
	id: str,
	title: str,
	source: SearchProvider = SearchProvider.SEMANTIC_SCHOLAR,
	abstract: Optional[str] = None,
	year: Optional[int] = None,
) -> SearchResultItem:
	return SearchResultItem(id=id, source=source, title=title, authors=["A. Author"], abstract=abstract, url=f"https://example.org/{id}", year=year)


class StubClient:
	"""Stands in for a provider client: canned items or a raised error."""

	def __init__(self, provider: SearchProvider, items: Sequence[SearchResultItem] = (), error: Optional[Exception] = None) -> None:
		self.provider = provider
		self.items = list(items)
		self.error = error
		self.calls: List[tuple] = []

	async def search(self, query: str, limit: int) -> List[SearchResultItem]:
		self.calls.append((query, limit))
		if self.error is not None:
			raise self.error
		return self.items[:limit]


class FakeLLM:
	"""Scripted model: returns the queued responses in order, repeating the last."""

	def __init__(self, *responses: Union[str, Exception]) -> None:
		self.responses = list(responses)
		self.calls: List[dict] = []

	async def generate(self, messages, model=None, temperature=0.2, max_tokens=None) -> str:
		self.calls.append({"messages": messages, "model": model, "temperature": temperature, "max_tokens": max_tokens})
		response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
		if isinstance(response, Exception):
			raise response
		return response
