from __future__ import annotations

import asyncio

import streamlit as st

from research_assistant.config import get_settings
from research_assistant.container import build_services
from research_assistant.schemas import SearchProvider, SearchResponse


async def _search(query: str, provider: SearchProvider, limit: int) -> SearchResponse:
	services = build_services(get_settings())
	try:
		return await services.search.search(query, provider=provider, limit=limit)
	finally:
		await services.aclose()


st.set_page_config(page_title="Research Assistant", layout="wide")

st.title("Research Assistant")

with st.form("search_form"):
	query = st.text_input("Search query", placeholder="e.g., graph neural networks for drug discovery")
	provider = st.selectbox("Source", options=list(SearchProvider), index=list(SearchProvider).index(SearchProvider.ALL_SOURCES), format_func=lambda p: p.value)
	limit = st.slider("Number of results", min_value=1, max_value=50, value=get_settings().default_search_limit)
	submitted = st.form_submit_button("Search")

if submitted and query.strip():
	with st.spinner("Querying providers..."):
		resp = asyncio.run(_search(query.strip(), provider, limit))
	if not resp.sources:
		st.warning("No provider answered; showing placeholder results.")
	for it in resp.items:
		authors = ", ".join(it.authors) if it.authors else "Unknown"
		st.markdown(f"**{it.title}** ({it.year or 'n.d.'}) [{it.source.value}]")
		st.caption(authors)
		if it.abstract:
			st.write(it.abstract)
		if it.url:
			st.write(it.url)
	st.success(f"{len(resp.items)} results from {', '.join(resp.sources or []) or 'placeholders'} in {resp.search_time} ms")
