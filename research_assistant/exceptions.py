"""Errors surfaced to callers of the summarize and analytics services.

Provider and orchestrator failures never reach this layer; they are
recovered inside the search package.
"""

from __future__ import annotations


class ResearchAssistantError(Exception):
	"""Base error carrying the HTTP status class it maps to."""

	status_code: int = 500

	def __init__(self, message: str) -> None:
		super().__init__(message)
		self.message = message

	def to_dict(self) -> dict:
		return {"detail": self.message}


class InvalidInputError(ResearchAssistantError):
	status_code = 400


class UnsupportedInputError(InvalidInputError):
	pass


class PaperNotFoundError(ResearchAssistantError):
	status_code = 404

	def __init__(self, paper_id: str) -> None:
		super().__init__(f"Paper not found: {paper_id}")
		self.paper_id = paper_id


class AnalysisError(ResearchAssistantError):
	status_code = 500
