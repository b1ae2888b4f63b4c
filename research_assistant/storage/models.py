from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class CachedPaper(Base):
	__tablename__ = "paper_cache"

	# raw provider id, not namespaced by source
	external_id: Mapped[str] = mapped_column(String(512), primary_key=True)
	source: Mapped[str] = mapped_column(String(32), index=True)
	title: Mapped[str] = mapped_column(Text, default="")
	authors: Mapped[List[str]] = mapped_column(JSON, default=list)
	abstract: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
	url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
	year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
	raw_json: Mapped[Any] = mapped_column(JSON, nullable=True)

	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
	updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class Summary(Base):
	__tablename__ = "summaries"

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	input_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
	user_id: Mapped[str] = mapped_column(String(128), index=True)
	paper_id: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
	source: Mapped[str] = mapped_column(String(32))
	summary: Mapped[str] = mapped_column(Text)
	key_ideas: Mapped[List[str]] = mapped_column(JSON, default=list)

	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
