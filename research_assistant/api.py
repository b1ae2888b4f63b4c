from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from . import __version__
from .config import AppSettings, get_settings
from .container import Services, build_services
from .exceptions import ResearchAssistantError
from .research import run_deep_research
from .schemas import (
	AnalyzePaperEnvelope,
	AnalyzePaperRequest,
	DeepResearchRequest,
	DeepResearchResponse,
	SearchProvider,
	SearchResponse,
	SummarizeRequest,
	SummaryResponse,
)
from .utils.log import configure_logging


def get_services(request: Request) -> Services:
	return request.app.state.services


def create_app(settings: Optional[AppSettings] = None, services: Optional[Services] = None) -> FastAPI:
	@asynccontextmanager
	async def lifespan(app: FastAPI) -> AsyncIterator[None]:
		owned = services is None
		cfg = settings or get_settings()
		configure_logging(cfg.log_level)
		app.state.services = services or build_services(cfg)
		logger.info(f"Research Assistant API v{__version__} started")
		try:
			yield
		finally:
			if owned:
				await app.state.services.aclose()

	app = FastAPI(title="Research Assistant API", version=__version__, default_response_class=ORJSONResponse, lifespan=lifespan)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	@app.exception_handler(ResearchAssistantError)
	async def handle_service_error(request: Request, exc: ResearchAssistantError) -> ORJSONResponse:
		logger.warning(f"{request.method} {request.url.path} failed with {exc.status_code}: {exc.message}")
		return ORJSONResponse(status_code=exc.status_code, content=exc.to_dict())

	@app.get("/healthz")
	async def healthz() -> dict:
		return {"status": "ok", "version": __version__}

	@app.get("/search", response_model=SearchResponse)
	async def search_endpoint(
		q: str = Query(..., min_length=1),
		provider: SearchProvider = Query(SearchProvider.SEMANTIC_SCHOLAR),
		limit: Optional[int] = Query(None, ge=1, le=50),
		svc: Services = Depends(get_services),
	) -> SearchResponse:
		return await svc.search.search(q, provider=provider, limit=limit)

	@app.post("/search/deep-research", response_model=DeepResearchResponse)
	async def deep_research_endpoint(req: DeepResearchRequest, svc: Services = Depends(get_services)) -> DeepResearchResponse:
		return await run_deep_research(svc.search, req)

	@app.post("/summarize", response_model=SummaryResponse)
	async def summarize_endpoint(
		req: SummarizeRequest,
		x_user_id: str = Header("anonymous"),
		svc: Services = Depends(get_services),
	) -> SummaryResponse:
		return await svc.summarizer.summarize(req, user_id=x_user_id)

	@app.post("/analytics/article", response_model=AnalyzePaperEnvelope)
	async def analyze_endpoint(req: AnalyzePaperRequest, svc: Services = Depends(get_services)) -> AnalyzePaperEnvelope:
		return AnalyzePaperEnvelope(data=await svc.analytics.analyze(req))

	return app
