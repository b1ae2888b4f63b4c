"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import pytest

from research_assistant.config import AppSettings
from research_assistant.schemas import SearchProvider
from research_assistant.search import FederatedSearch
from research_assistant.storage.db import Database
from research_assistant.storage.paper_cache import PaperCache
from research_assistant.storage.summary_store import SummaryStore

from .helpers import StubClient, make_item


@pytest.fixture
def settings(tmp_path):
	"""Settings pointing at a throwaway SQLite file."""
	return AppSettings(
		database_url=f"sqlite:///{tmp_path / 'test.db'}",
		provider_timeout=1.0,
		crossref_mailto="tests@example.com",
		default_llm_provider="ollama",
		llm_model=None,
		related_papers_provider="semantic_scholar",
	)


@pytest.fixture
def db(settings):
	database = Database(settings.database_url)
	database.create_all()
	yield database
	database.dispose()


@pytest.fixture
def paper_cache(db):
	return PaperCache(db)


@pytest.fixture
def summary_store(db):
	return SummaryStore(db)


@pytest.fixture
def stub_clients():
	"""One stub per provider, each answering with a single distinct paper."""
	return {
		SearchProvider.SEMANTIC_SCHOLAR: StubClient(
			SearchProvider.SEMANTIC_SCHOLAR,
			[make_item("s2-1", "Graph Neural Networks for Chemistry", abstract="message passing", year=2022)],
		),
		SearchProvider.ARXIV: StubClient(
			SearchProvider.ARXIV,
			[make_item("2101.00001", "Attention Is Everything", SearchProvider.ARXIV, year=2021)],
		),
		SearchProvider.PUBMED: StubClient(
			SearchProvider.PUBMED,
			[make_item("pubmed:1", "Clinical Outcomes of Therapy", SearchProvider.PUBMED, year=2019)],
		),
		SearchProvider.CROSSREF: StubClient(
			SearchProvider.CROSSREF,
			[make_item("10.1000/x", "Neural Networks in Practice", SearchProvider.CROSSREF, year=2020)],
		),
		SearchProvider.WEB_SEARCH: StubClient(SearchProvider.WEB_SEARCH),
	}


@pytest.fixture
def federated(stub_clients):
	return FederatedSearch(stub_clients)
