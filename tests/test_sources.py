"""
Tests for the provider clients, with HTTP stubbed through httpx.MockTransport.
"""

import httpx
import pytest

from research_assistant.schemas import SearchProvider
from research_assistant.sources import (
	ArxivClient,
	CrossrefClient,
	PubMedClient,
	SemanticScholarClient,
	WebSearchClient,
)
from research_assistant.sources.arxiv_client import parse_feed

USER_AGENT = "AI Research Assistant (academic research tool)"

ARXIV_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>arXiv Query</title>
  <entry>
    <id>http://arxiv.org/abs/2101.00001v1</id>
    <published>2021-01-04T18:00:00Z</published>
    <title>Quantum
      Computing Basics</title>
    <summary>First line
second line.</summary>
    <author><name>Alice Quantum</name></author>
    <author><name>Bob Qubit</name></author>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2101.00002v2</id>
    <published>2020-05-01T00:00:00Z</published>
    <summary>An entry without a title is skipped.</summary>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2101.00003v1</id>
    <published>not a date</published>
    <title>Undated Paper</title>
  </entry>
</feed>
"""


def _transport(handler, seen=None):
	def wrapped(request: httpx.Request) -> httpx.Response:
		if seen is not None:
			seen.append(request)
		return handler(request)

	return httpx.MockTransport(wrapped)


# =============================================================================
# Semantic Scholar
# =============================================================================


class TestSemanticScholarClient:
	async def test_normalizes_papers(self, settings):
		seen = []

		def handler(request):
			return httpx.Response(
				200,
				json={
					"data": [
						{
							"paperId": "abc123",
							"title": "Neural Networks",
							"authors": [{"authorId": "1", "name": "Ada Lovelace"}, {"authorId": "2", "name": "Alan Turing"}],
							"abstract": "We study networks.",
							"url": "https://www.semanticscholar.org/paper/abc123",
							"year": 2021,
						},
						{"paperId": "def456", "title": None, "authors": None, "abstract": None, "url": None, "year": None},
					]
				},
			)

		client = SemanticScholarClient(settings, transport=_transport(handler, seen))
		items = await client.search("neural networks", 5)

		assert [i.id for i in items] == ["abc123", "def456"]
		first = items[0]
		assert first.source == SearchProvider.SEMANTIC_SCHOLAR
		assert first.authors == ["Ada Lovelace", "Alan Turing"]
		assert first.year == 2021
		assert items[1].title == ""
		assert items[1].year is None

		request = seen[0]
		assert request.url.path == "/graph/v1/paper/search"
		assert request.url.params["query"] == "neural networks"
		assert request.url.params["limit"] == "5"
		assert request.headers["user-agent"] == USER_AGENT

	async def test_rate_limit_returns_placeholders(self, settings):
		client = SemanticScholarClient(settings, transport=_transport(lambda r: httpx.Response(429, json={})))
		items = await client.search("graphs", 2)

		assert [i.id for i in items] == ["mock-1", "mock-2"]
		assert all(i.source == SearchProvider.SEMANTIC_SCHOLAR for i in items)
		assert "graphs" in items[0].title

	async def test_caches_every_item(self, settings, paper_cache):
		def handler(request):
			return httpx.Response(200, json={"data": [{"paperId": "p1", "title": "Cached Paper", "authors": [], "year": 2020}]})

		client = SemanticScholarClient(settings, cache=paper_cache, transport=_transport(handler))
		await client.search("cached", 1)
		await paper_cache.flush()

		row = await paper_cache.get("p1")
		assert row is not None
		assert row.title == "Cached Paper"
		assert row.source == "semantic_scholar"
		assert row.raw_json["paperId"] == "p1"


# =============================================================================
# arXiv
# =============================================================================


class TestArxivClient:
	def test_parse_feed_skips_entries_without_title(self):
		records = parse_feed(ARXIV_FEED, 10)
		assert [r["title"] for r in records] == ["Quantum Computing Basics", "Undated Paper"]
		assert records[0]["summary"] == "First line second line."

	async def test_search_maps_entries(self, settings):
		seen = []
		client = ArxivClient(settings, transport=_transport(lambda r: httpx.Response(200, text=ARXIV_FEED), seen))
		items = await client.search("quantum", 10)

		assert [i.id for i in items] == ["2101.00001v1", "2101.00003v1"]
		first = items[0]
		assert first.source == SearchProvider.ARXIV
		assert first.url == "http://arxiv.org/abs/2101.00001v1"
		assert first.authors == ["Alice Quantum", "Bob Qubit"]
		assert first.year == 2021
		assert items[1].year is None
		assert items[1].abstract is None

		params = seen[0].url.params
		assert params["search_query"] == "all:quantum"
		assert params["max_results"] == "10"
		assert params["sortBy"] == "relevance"

	async def test_limit_caps_entries(self, settings):
		client = ArxivClient(settings, transport=_transport(lambda r: httpx.Response(200, text=ARXIV_FEED)))
		items = await client.search("quantum", 1)
		assert len(items) == 1

	async def test_transport_error_returns_empty(self, settings):
		def handler(request):
			raise httpx.ConnectError("boom", request=request)

		client = ArxivClient(settings, transport=_transport(handler))
		assert await client.search("quantum", 5) == []


# =============================================================================
# PubMed
# =============================================================================


class TestPubMedClient:
	async def test_two_step_lookup(self, settings):
		seen = []

		def handler(request):
			if request.url.path.endswith("esearch.fcgi"):
				return httpx.Response(200, json={"esearchresult": {"idlist": ["111", "222", "333"]}})
			return httpx.Response(
				200,
				json={
					"result": {
						"uids": ["111", "222"],
						"111": {"title": "Aspirin and Outcomes", "authors": [{"name": "Smith J"}], "pubdate": "2023 Jan 15"},
						"222": {"title": "Undated Trial", "authors": [], "pubdate": ""},
					}
				},
			)

		client = PubMedClient(settings, transport=_transport(handler, seen))
		items = await client.search("aspirin", 3)

		assert [i.id for i in items] == ["pubmed:111", "pubmed:222"]
		assert items[0].url == "https://pubmed.ncbi.nlm.nih.gov/111/"
		assert items[0].authors == ["Smith J"]
		assert items[0].year == 2023
		assert items[1].year is None
		assert all(i.source == SearchProvider.PUBMED for i in items)

		assert seen[0].url.params["term"] == "aspirin"
		assert seen[0].url.params["retmax"] == "3"
		assert seen[1].url.params["id"] == "111,222,333"

	async def test_no_ids_skips_summary_call(self, settings):
		seen = []
		client = PubMedClient(settings, transport=_transport(lambda r: httpx.Response(200, json={"esearchresult": {"idlist": []}}), seen))
		assert await client.search("nothing", 5) == []
		assert len(seen) == 1

	async def test_server_error_returns_empty(self, settings):
		client = PubMedClient(settings, transport=_transport(lambda r: httpx.Response(503)))
		assert await client.search("aspirin", 5) == []


# =============================================================================
# Crossref
# =============================================================================


class TestCrossrefClient:
	async def test_normalizes_works(self, settings):
		seen = []

		def handler(request):
			return httpx.Response(
				200,
				json={
					"message": {
						"items": [
							{
								"DOI": "10.1000/xyz",
								"URL": "https://doi.org/10.1000/xyz",
								"title": ["Crossref Paper"],
								"author": [{"given": "Grace", "family": "Hopper"}, {"family": "Knuth"}, {"name": "ATLAS Collaboration"}],
								"abstract": "<jats:p>Compilers &amp; more.</jats:p>",
								"published": {"date-parts": [[2019, 5, 1]]},
							},
							{"URL": "https://example.org/no-doi", "title": [], "author": None},
						]
					}
				},
			)

		client = CrossrefClient(settings, transport=_transport(handler, seen))
		items = await client.search("compilers", 2)

		assert [i.id for i in items] == ["10.1000/xyz", "https://example.org/no-doi"]
		first = items[0]
		assert first.authors == ["Grace Hopper", "Knuth", "ATLAS Collaboration"]
		assert first.abstract == "Compilers & more."
		assert first.year == 2019
		assert items[1].title == ""
		assert items[1].year is None

		params = seen[0].url.params
		assert params["rows"] == "2"
		assert params["sort"] == "relevance"
		assert params["order"] == "desc"
		assert params["mailto"] == "tests@example.com"

	async def test_malformed_body_returns_empty(self, settings):
		client = CrossrefClient(settings, transport=_transport(lambda r: httpx.Response(200, text="not json")))
		assert await client.search("compilers", 2) == []


# =============================================================================
# Web search stub
# =============================================================================


async def test_web_search_is_a_stub(settings):
	def handler(request):
		pytest.fail("web search must not issue requests")

	client = WebSearchClient(settings, transport=_transport(handler))
	assert await client.search("anything", 5) == []
