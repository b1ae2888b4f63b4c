from __future__ import annotations

import asyncio
from typing import List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from .db import Database
from .models import Summary


class SummaryStore:
	def __init__(self, db: Database) -> None:
		self._db = db

	def get_by_hash_sync(self, input_hash: str) -> Optional[Summary]:
		with self._db.session() as session:
			return session.scalars(select(Summary).where(Summary.input_hash == input_hash)).first()

	def create_sync(
		self,
		*,
		input_hash: str,
		user_id: str,
		source: str,
		summary: str,
		key_ideas: List[str],
		paper_id: Optional[str] = None,
	) -> Summary:
		"""Insert a summary; on a duplicate hash return the row that won."""
		row = Summary(
			input_hash=input_hash,
			user_id=user_id,
			paper_id=paper_id,
			source=source,
			summary=summary,
			key_ideas=list(key_ideas),
		)
		with self._db.session() as session:
			try:
				session.add(row)
				session.commit()
				return row
			except IntegrityError:
				session.rollback()
				logger.info(f"Summary {input_hash[:12]} already stored by a concurrent request; reusing it")
		existing = self.get_by_hash_sync(input_hash)
		if existing is None:
			raise RuntimeError(f"Summary {input_hash} conflicted but could not be re-read")
		return existing

	async def get_by_hash(self, input_hash: str) -> Optional[Summary]:
		return await asyncio.to_thread(self.get_by_hash_sync, input_hash)

	async def create(self, **fields) -> Summary:
		return await asyncio.to_thread(lambda: self.create_sync(**fields))
