"""
Tests for the HTTP routes, with services wired to stub providers and a fake model.
"""

import json

import pytest
from fastapi.testclient import TestClient

from research_assistant.analytics import AnalyticsService
from research_assistant.api import create_app
from research_assistant.container import Services
from research_assistant.summarize import SummarizeService

from .helpers import FakeLLM


@pytest.fixture
def llm():
	return FakeLLM(json.dumps({"summary": "Short.", "keyIdeas": ["one", "two"], "keyWords": ["k"], "topic": "T"}))


@pytest.fixture
def client(settings, db, paper_cache, summary_store, federated, llm):
	services = Services(
		settings=settings,
		db=db,
		papers=paper_cache,
		summaries=summary_store,
		search=federated,
		summarizer=SummarizeService(settings, llm, federated, paper_cache, summary_store),
		analytics=AnalyticsService(settings, llm),
	)
	with TestClient(create_app(settings=settings, services=services)) as test_client:
		yield test_client


def test_healthz(client):
	resp = client.get("/healthz")
	assert resp.status_code == 200
	assert resp.json()["status"] == "ok"


def test_search_single_provider(client):
	resp = client.get("/search", params={"q": "attention", "provider": "arxiv", "limit": 2})

	assert resp.status_code == 200
	body = resp.json()
	assert body["sources"] == ["arxiv"]
	assert [i["source"] for i in body["items"]] == ["arxiv"]
	assert isinstance(body["searchTime"], int)


def test_search_all_sources_uses_camel_case(client):
	body = client.get("/search", params={"q": "neural networks", "provider": "all_sources"}).json()

	assert body["totalFound"] == 4
	assert len(body["sources"]) == 4


@pytest.mark.parametrize("params", [{"q": "x", "limit": 0}, {"q": "x", "limit": 51}, {"q": "x", "provider": "bing"}, {}])
def test_search_validation(client, params):
	assert client.get("/search", params=params).status_code == 422


def test_deep_research(client):
	resp = client.post("/search/deep-research", json={"topic": "quantum computing", "maxSources": 20})

	assert resp.status_code == 200
	body = resp.json()
	assert body["totalSources"] == 4
	assert body["totalResults"] == len(body["papers"])
	assert body["researchDepth"] == "standard"


@pytest.mark.parametrize("payload", [{"topic": "t", "maxSources": 5}, {"topic": "t", "maxSources": 201}, {"topic": "t", "researchDepth": "extreme"}])
def test_deep_research_validation(client, payload):
	assert client.post("/search/deep-research", json=payload).status_code == 422


def test_summarize_text(client, llm):
	resp = client.post("/summarize", json={"text": "Some text"}, headers={"X-User-Id": "user-7"})

	assert resp.status_code == 200
	body = resp.json()
	assert body["summary"] == "Short."
	assert body["keyIdeas"] == ["one", "two"]
	assert isinstance(body["relatedPapers"], list)
	assert len(llm.calls) == 1


def test_summarize_model_outage_is_not_an_error(client, llm):
	llm.responses = [RuntimeError("connection refused")]

	resp = client.post("/summarize", json={"text": "Outage text"})

	assert resp.status_code == 200
	assert resp.json()["keyIdeas"] == []
	assert resp.json()["relatedPapers"] == []


def test_summarize_errors(client):
	missing = client.post("/summarize", json={})
	assert missing.status_code == 400
	assert "paperId" in missing.json()["detail"]

	assert client.post("/summarize", json={"url": "https://example.org"}).status_code == 400
	assert client.post("/summarize", json={"paperId": "unknown"}).status_code == 404


def test_analyze_article(client):
	paper = {"id": "p1", "source": "arxiv", "title": "T", "authors": ["A"], "abstract": "Abstract text"}
	resp = client.post("/analytics/article", json=paper)

	assert resp.status_code == 200
	body = resp.json()
	assert body["success"] is True
	assert body["data"]["keyWords"] == ["k"]
	assert body["data"]["topic"] == "T"
	assert body["data"]["title"] == "T"


def test_analyze_without_abstract_is_server_error(client):
	resp = client.post("/analytics/article", json={"id": "p1", "source": "arxiv", "title": "T"})
	assert resp.status_code == 500
	assert resp.json()["detail"] == "Abstract is missing"
