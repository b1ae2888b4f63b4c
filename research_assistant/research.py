from __future__ import annotations

from loguru import logger

from .schemas import DeepResearchRequest, DeepResearchResponse, SearchProvider
from .search import FederatedSearch


async def run_deep_research(search: FederatedSearch, request: DeepResearchRequest) -> DeepResearchResponse:
	"""Deep research is, for now, a federated search over every source.

	``research_depth`` is echoed back and ``language`` is accepted but not
	used; there is no staged progress reporting.
	"""
	logger.info(f"Deep research on '{request.topic}' (max_sources={request.max_sources}, depth={request.research_depth})")
	result = await search.search(request.topic, provider=SearchProvider.ALL_SOURCES, limit=request.max_sources)
	sources = result.sources or []
	return DeepResearchResponse(
		topic=request.topic,
		research_depth=request.research_depth,
		total_sources=len(sources),
		total_results=len(result.items),
		sources=sources,
		papers=result.items,
		search_time=result.search_time,
	)
