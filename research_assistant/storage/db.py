from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
	pass


class Database:
	"""Engine plus session factory. Sessions are opened per operation."""

	def __init__(self, url: str, echo: bool = False) -> None:
		connect_args: Dict[str, Any] = {}
		if url.startswith("sqlite"):
			# sessions are used from asyncio worker threads
			connect_args["check_same_thread"] = False
		self.url = url
		self.engine: Engine = create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)
		self._sessionmaker = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

	@property
	def dialect(self) -> str:
		return self.engine.dialect.name

	def session(self) -> Session:
		return self._sessionmaker()

	def create_all(self) -> None:
		from . import models  # noqa: F401  registers tables on Base.metadata

		Base.metadata.create_all(bind=self.engine)

	def dispose(self) -> None:
		self.engine.dispose()
