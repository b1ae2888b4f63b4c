from __future__ import annotations

from typing import List

from ..schemas import SearchProvider, SearchResultItem


def placeholder_results(query: str, limit: int) -> List[SearchResultItem]:
	"""Synthetic papers returned when real providers cannot answer."""
	templates = [
		SearchResultItem(
			id="mock-1",
			source=SearchProvider.SEMANTIC_SCHOLAR,
			title=f"Comprehensive Survey of {query} Applications",
			authors=["Alice Johnson", "Bob Smith"],
			abstract=(
				f"This comprehensive survey explores the current state of {query} research, examining key "
				"methodologies, challenges, and future directions. We analyze over 100 recent publications "
				"to provide insights into emerging trends and opportunities in this rapidly evolving field."
			),
			url="https://example.com/paper1",
			year=2023,
		),
		SearchResultItem(
			id="mock-2",
			source=SearchProvider.SEMANTIC_SCHOLAR,
			title=f"Deep Learning Approaches to {query}",
			authors=["Carol Davis", "David Wilson"],
			abstract=(
				f"Recent advances in deep learning have shown promising results in {query}. This review covers "
				"the latest developments, challenges, and opportunities in applying neural networks to this domain."
			),
			url="https://example.com/paper2",
			year=2024,
		),
		SearchResultItem(
			id="mock-3",
			source=SearchProvider.SEMANTIC_SCHOLAR,
			title=f"Statistical Analysis of {query} Patterns",
			authors=["Charlie Brown", "Diana Prince"],
			abstract=(
				f"We present a statistical framework for analyzing patterns in {query}. Our methodology combines "
				"classical statistical approaches with modern computational techniques to provide robust analysis tools."
			),
			url="https://example.com/paper3",
			year=2022,
		),
	]
	return templates[: max(0, min(limit, len(templates)))]
