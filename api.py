"""
FastAPI server exposing the movie Q&A bot.
Endpoints:
- POST /api/query: answer a natural-language question about the catalog
- GET /api/health: catalog size and active generation provider

Startup loads the CSV catalog (fatal if it cannot) and selects the configured provider.
"""

# Import standard libraries for timing and timestamps
import time  # measure startup and request latencies
from datetime import datetime, timezone  # health timestamp
from typing import Optional  # precise typing for clarity

# Import FastAPI for the web API and Pydantic for request/response models
from fastapi import FastAPI, Request  # FastAPI primitives
from fastapi.concurrency import run_in_threadpool  # keep the event loop free during generation
from fastapi.responses import JSONResponse  # explicit error payloads
from pydantic import BaseModel  # request/response schema definitions

# Import our internal modules for configuration, loading, and answering
from moviebot.config import configure_logging, get_settings  # env-based settings
from moviebot.data_loader import build_catalog  # CSV -> CatalogIndex
from moviebot.llm_providers import build_provider  # active provider selection
from moviebot.qa_engine import MovieQAEngine  # core pipeline

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Q&A Bot API", version="1.0.0")  # web app
app.state.engine = None  # set by the startup hook (or directly by tests)


# Incoming question; query is optional here so a missing field gets our own 400 payload
class QueryRequest(BaseModel):
	query: Optional[str] = None  # natural-language question


# Answer payload returned to clients
class QueryResponse(BaseModel):
	query: str  # original question
	queryType: str  # detected category tag
	response: str  # final answer text
	matches: int  # number of retrieved movies
	llmUsed: bool  # whether a generation provider is configured


# FastAPI startup hook to initialize the engine once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog, pick the provider, and check it is reachable."""
	settings = get_settings()  # env / .env configuration
	configure_logging(settings.log_level)  # console sink at configured level
	start = time.time()  # start timer for startup latency

	logger.info("[API] Startup: loading movie catalog...")  # log intent
	catalog = build_catalog(settings.movies_csv_path)  # raises CatalogUnavailableError on failure
	provider = build_provider(settings)  # one provider or None

	engine = MovieQAEngine(catalog, provider)  # create engine
	engine.check_provider()  # logs only
	app.state.engine = engine

	elapsed = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {elapsed:.2f}s. Loaded {len(catalog)} movies | LLM: {engine.provider_name}")


# Health endpoint for readiness checks
@app.get("/api/health")
async def health(request: Request):
	"""Report catalog size and the active provider."""
	engine: Optional[MovieQAEngine] = request.app.state.engine
	return {
		"status": "OK",
		"moviesLoaded": len(engine.catalog) if engine else 0,
		"llmEnabled": engine.llm_enabled if engine else False,
		"llmType": engine.provider_name if engine else "none",
		"timestamp": datetime.now(timezone.utc).isoformat(),
	}


# Main endpoint that answers a free-text question
@app.post("/api/query", response_model=QueryResponse)
async def query(request: Request, body: Optional[QueryRequest] = None):
	"""Answer one question; provider problems are handled inside the engine."""
	text = body.query if body else None
	if not text or not text.strip():  # reject before touching the catalog
		return JSONResponse(
			status_code=400,
			content={"error": "Query is required", "response": "Please provide a question about movies."},
		)

	engine: Optional[MovieQAEngine] = request.app.state.engine
	if engine is None:  # startup has not finished
		logger.warning("[API] Query received but engine not initialized")
		return JSONResponse(
			status_code=503,
			content={"error": "Service unavailable", "response": "The movie catalog is still loading."},
		)

	start = time.time()  # start timer
	try:
		answer = await run_in_threadpool(engine.answer, text)
	except Exception as e:
		logger.exception(f"[API] Error processing query: {e}")
		return JSONResponse(
			status_code=500,
			content={
				"error": "Internal server error",
				"response": "Sorry, I encountered an error while processing your question.",
			},
		)

	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /api/query answered in {elapsed_ms:.2f} ms | type={answer.query_type.value}")
	return QueryResponse(
		query=answer.query,
		queryType=answer.query_type.value,
		response=answer.response,
		matches=answer.matches,
		llmUsed=answer.llm_used,
	)


if __name__ == "__main__":
	import uvicorn  # ASGI server

	uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
