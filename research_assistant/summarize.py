from __future__ import annotations

import json
from typing import List, Optional, Tuple

from loguru import logger

from .config import AppSettings
from .exceptions import InvalidInputError, PaperNotFoundError, UnsupportedInputError
from .llm.providers import ChatMessage, LLMProvider
from .schemas import RelatedPaper, SearchProvider, SummarizeRequest, SummaryResponse
from .search import FederatedSearch
from .storage.paper_cache import PaperCache
from .storage.summary_store import SummaryStore
from .utils.text import content_hash

FALLBACK_SUMMARY_CHARS = 500
MISSING_SUMMARY = "Could not generate a summary"
FAILED_SUMMARY = "An error occurred while generating the summary"

SUMMARY_PROMPT = """Summarize the scientific text below. Be brief and structured, with no filler.

Text to summarize:
{text}

Return the result as JSON:
{{
  "summary": "a short description in 5-10 sentences",
  "keyIdeas": ["key idea 1", "key idea 2", "key idea 3"]
}}"""


def parse_summary(content: str) -> Tuple[str, List[str]]:
	"""Model output to (summary, key ideas); non-JSON falls back to truncated text."""
	try:
		parsed = json.loads(content)
	except ValueError:
		parsed = None
	if not isinstance(parsed, dict):
		return content[:FALLBACK_SUMMARY_CHARS] + "...", []
	key_ideas = parsed.get("keyIdeas")
	return (
		parsed.get("summary") or MISSING_SUMMARY,
		[str(k) for k in key_ideas] if isinstance(key_ideas, list) else [],
	)


class SummarizeService:
	def __init__(
		self,
		settings: AppSettings,
		llm: LLMProvider,
		search: FederatedSearch,
		papers: PaperCache,
		summaries: SummaryStore,
	) -> None:
		self._settings = settings
		self._llm = llm
		self._search = search
		self._papers = papers
		self._summaries = summaries

	async def summarize(self, request: SummarizeRequest, user_id: str) -> SummaryResponse:
		text, source = await self._resolve_input(request)
		input_hash = content_hash(text)

		existing = await self._summaries.get_by_hash(input_hash)
		if existing is not None:
			logger.debug(f"Summary cache hit for {input_hash[:12]}")
			return SummaryResponse(summary=existing.summary, key_ideas=list(existing.key_ideas or []), related_papers=[])

		generated = await self._generate_summary(text)
		if generated is None:
			# not persisted, so the next identical request retries the model
			return SummaryResponse(summary=FAILED_SUMMARY, key_ideas=[], related_papers=[])
		summary, key_ideas = generated
		stored = await self._summaries.create(
			input_hash=input_hash,
			user_id=user_id,
			paper_id=request.paper_id,
			source=source,
			summary=summary,
			key_ideas=key_ideas,
		)
		related = await self.find_related_papers(list(stored.key_ideas or []))
		return SummaryResponse(summary=stored.summary, key_ideas=list(stored.key_ideas or []), related_papers=related)

	async def _resolve_input(self, request: SummarizeRequest) -> Tuple[str, str]:
		if request.paper_id:
			paper = await self._papers.get(request.paper_id)
			if paper is None:
				raise PaperNotFoundError(request.paper_id)
			return paper.abstract or paper.title, "abstract"
		if request.text:
			return request.text, "text"
		if request.url:
			raise UnsupportedInputError("URL summarization not implemented yet")
		raise InvalidInputError("Either paperId, text, or url must be provided")

	async def _generate_summary(self, text: str) -> Optional[Tuple[str, List[str]]]:
		"""None when the model call fails or comes back empty."""
		messages: List[ChatMessage] = [{"role": "user", "content": SUMMARY_PROMPT.format(text=text)}]
		try:
			content = await self._llm.generate(messages=messages, model=self._settings.llm_model, temperature=0.3, max_tokens=1000)
		except Exception as e:
			logger.error(f"Error generating summary: {e}")
			return None
		if not content:
			logger.error("Error generating summary: empty response from the language model")
			return None
		return parse_summary(content)

	async def find_related_papers(self, key_ideas: List[str]) -> List[RelatedPaper]:
		if not key_ideas:
			return []
		try:
			result = await self._search.search(
				" ".join(key_ideas[:3]),
				provider=self._related_provider(),
				limit=5,
			)
			return [RelatedPaper(id=i.id, title=i.title, url=i.url, source=i.source.value) for i in result.items]
		except Exception as e:
			logger.error(f"Error finding related papers: {e}")
			return []

	def _related_provider(self) -> Optional[SearchProvider]:
		try:
			return SearchProvider(self._settings.related_papers_provider)
		except ValueError:
			return None
