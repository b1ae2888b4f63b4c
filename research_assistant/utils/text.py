from __future__ import annotations

import hashlib
import html
import re
from typing import Any, Iterable, List, Optional


_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")
_YEAR_RE = re.compile(r"\b(\d{4})\b")


def collapse_whitespace(text: Optional[str]) -> str:
	if not text:
		return ""
	return _WS_RE.sub(" ", text).strip()


def strip_markup(text: Optional[str]) -> Optional[str]:
	"""Remove JATS/HTML tags and entities, e.g. from Crossref abstracts."""
	if not text:
		return None
	text = html.unescape(text)
	text = _TAG_RE.sub(" ", text)
	return collapse_whitespace(text) or None


def title_key(title: Optional[str]) -> str:
	return (title or "").strip().lower()


def query_tokens(query: str) -> List[str]:
	return query.lower().split()


def content_hash(text: str) -> str:
	return hashlib.sha256(text.strip().lower().encode("utf-8")).hexdigest()


def extract_year(value: Any) -> Optional[int]:
	"""Year from an int or a free-text date such as '2023 Jan 15' or '2021-06-01T00:00:00Z'."""
	if value is None or isinstance(value, bool):
		return None
	if isinstance(value, int):
		return value
	m = _YEAR_RE.search(str(value))
	return int(m.group(1)) if m else None


def join_name_parts(parts: Iterable[Optional[str]]) -> str:
	return " ".join(p.strip() for p in parts if p and p.strip())
