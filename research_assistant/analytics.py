from __future__ import annotations

import json
from typing import List, Optional

from loguru import logger

from .config import AppSettings
from .exceptions import AnalysisError
from .llm.providers import ChatMessage, LLMProvider
from .schemas import AnalyzePaperRequest, AnalyzePaperResponse

ANALYSIS_PROMPT = """You are an analytical model. Analyze the abstract of a scientific article.

!!! IMPORTANT !!!
Return the answer strictly as JSON.
Do NOT write text outside the JSON. Do NOT add explanations.

Response format:

{{
  "summary": "a short summary",
  "keyWords": ["word1", "word2", "..."],
  "topic": "1-2 phrases about the article's subject"
}}

Here is the text to analyze:
{abstract}
"""


class AnalyticsService:
	"""Single-shot abstract analysis. Unlike summaries, nothing is cached and
	unparseable model output is an error rather than a fallback."""

	def __init__(self, settings: AppSettings, llm: LLMProvider) -> None:
		self._settings = settings
		self._llm = llm

	async def analyze(self, paper: AnalyzePaperRequest) -> AnalyzePaperResponse:
		if not paper.abstract or not paper.abstract.strip():
			raise AnalysisError("Abstract is missing")

		messages: List[ChatMessage] = [
			{"role": "system", "content": "You are an analyst of scientific articles."},
			{"role": "user", "content": ANALYSIS_PROMPT.format(abstract=paper.abstract)},
		]
		try:
			content = await self._llm.generate(messages=messages, model=self._settings.llm_model, temperature=0.3)
		except Exception as e:
			logger.error(f"Error analyzing article {paper.id}: {e}")
			raise AnalysisError("Error while analyzing the article") from e
		logger.debug(f"Analysis response for {paper.id}: {content!r}")

		if not content:
			raise AnalysisError("The language model returned an empty response")
		try:
			data = json.loads(content)
		except ValueError as e:
			logger.error(f"Unparseable analysis for {paper.id}: {e}")
			raise AnalysisError("Error while analyzing the article") from e
		if not isinstance(data, dict):
			raise AnalysisError("Error while analyzing the article")

		key_words = data.get("keyWords")
		return AnalyzePaperResponse(
			**paper.model_dump(exclude={"summary", "key_words"}),
			summary=_as_text(data.get("summary")),
			key_words=[str(k) for k in key_words] if isinstance(key_words, list) else None,
			topic=_as_text(data.get("topic")),
		)


def _as_text(value: object) -> Optional[str]:
	return None if value is None else str(value)
