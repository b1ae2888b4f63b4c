from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from loguru import logger
from sqlalchemy.dialects import postgresql, sqlite

from ..schemas import SearchResultItem
from .db import Database
from .models import CachedPaper

_UPSERT_INSERTS = {
	"sqlite": sqlite.insert,
	"postgresql": postgresql.insert,
}


class PaperCache:
	"""Durable mirror of provider records keyed by external id.

	Writes are last-write-wins upserts. Nothing is ever evicted.
	"""

	def __init__(self, db: Database) -> None:
		self._db = db
		self._pending: Set["asyncio.Task[None]"] = set()

	def upsert(self, item: SearchResultItem, raw: Any = None) -> None:
		values: Dict[str, Any] = {
			"external_id": item.id,
			"source": item.source.value,
			"title": item.title,
			"authors": list(item.authors),
			"abstract": item.abstract,
			"url": item.url,
			"year": item.year,
			"raw_json": raw if raw is not None else item.model_dump(mode="json"),
			"updated_at": datetime.now(timezone.utc),
		}
		insert = _UPSERT_INSERTS.get(self._db.dialect)
		with self._db.session() as session:
			try:
				if insert is None:
					session.merge(CachedPaper(**values))
				else:
					update = {k: v for k, v in values.items() if k != "external_id"}
					stmt = insert(CachedPaper).values(**values).on_conflict_do_update(
						index_elements=["external_id"],
						set_=update,
					)
					session.execute(stmt)
				session.commit()
			except Exception:
				session.rollback()
				raise

	def get_sync(self, external_id: str) -> Optional[CachedPaper]:
		with self._db.session() as session:
			return session.get(CachedPaper, external_id)

	async def store(self, item: SearchResultItem, raw: Any = None) -> None:
		await asyncio.to_thread(self.upsert, item, raw)

	async def get(self, external_id: str) -> Optional[CachedPaper]:
		return await asyncio.to_thread(self.get_sync, external_id)

	def store_in_background(self, item: SearchResultItem, raw: Any = None) -> None:
		"""Schedule a write without blocking the caller; failures are only logged."""
		task = asyncio.create_task(self.store(item, raw))
		self._pending.add(task)
		task.add_done_callback(self._write_done)

	def _write_done(self, task: "asyncio.Task[None]") -> None:
		self._pending.discard(task)
		if task.cancelled():
			return
		exc = task.exception()
		if exc is not None:
			logger.error(f"Error caching search result: {exc}")

	@property
	def pending(self) -> int:
		return len(self._pending)

	async def flush(self) -> None:
		"""Wait for scheduled writes to settle."""
		if self._pending:
			await asyncio.gather(*list(self._pending), return_exceptions=True)
