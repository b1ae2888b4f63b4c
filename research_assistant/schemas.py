from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SearchProvider(str, Enum):
	SEMANTIC_SCHOLAR = "semantic_scholar"
	ARXIV = "arxiv"
	PUBMED = "pubmed"
	GOOGLE_SCHOLAR = "google_scholar"
	CROSSREF = "crossref"
	WEB_SEARCH = "web_search"
	ALL_SOURCES = "all_sources"


class ApiModel(BaseModel):
	# snake_case in Python, camelCase on the wire
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SearchResultItem(ApiModel):
	id: str
	source: SearchProvider
	title: str = ""
	authors: List[str] = []
	abstract: Optional[str] = None
	url: Optional[str] = None
	year: Optional[int] = None


class SearchRequest(ApiModel):
	q: str
	provider: Optional[SearchProvider] = SearchProvider.SEMANTIC_SCHOLAR
	limit: int = Field(default=10, ge=1, le=50)


class SearchResponse(ApiModel):
	items: List[SearchResultItem] = []
	total_found: Optional[int] = None
	sources: Optional[List[str]] = None
	search_time: Optional[int] = Field(default=None, description="Elapsed milliseconds")


class DeepResearchRequest(ApiModel):
	topic: str
	max_sources: int = Field(default=50, ge=10, le=200)
	research_depth: Literal["quick", "standard", "deep"] = "standard"
	language: Literal["ru", "en", "any"] = "any"


class DeepResearchResponse(ApiModel):
	topic: str
	research_depth: str
	total_sources: int
	total_results: int
	sources: List[str]
	papers: List[SearchResultItem]
	search_time: Optional[int] = None


class SummarizeRequest(ApiModel):
	paper_id: Optional[str] = None
	provider: Optional[SearchProvider] = SearchProvider.SEMANTIC_SCHOLAR
	text: Optional[str] = None
	url: Optional[str] = None


class RelatedPaper(ApiModel):
	id: str
	title: str
	url: Optional[str] = None
	source: str


class SummaryResponse(ApiModel):
	summary: str
	key_ideas: List[str] = []
	related_papers: List[RelatedPaper] = []


class AnalyzePaperRequest(ApiModel):
	id: str
	source: str
	title: str
	authors: List[str] = []
	abstract: Optional[str] = None
	url: Optional[str] = None
	year: Optional[int] = None
	summary: Optional[str] = None
	key_words: Optional[List[str]] = None


class AnalyzePaperResponse(AnalyzePaperRequest):
	topic: Optional[str] = None


class AnalyzePaperEnvelope(ApiModel):
	success: bool = True
	data: AnalyzePaperResponse
