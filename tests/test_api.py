"""
API tests using FastAPI's TestClient with a pre-built engine (startup hook not run).
"""

import pytest
from fastapi.testclient import TestClient

import api
from moviebot.qa_engine import MovieQAEngine


@pytest.fixture
def client(catalog, failing_provider):
	api.app.state.engine = MovieQAEngine(catalog, failing_provider)
	yield TestClient(api.app)
	api.app.state.engine = None


def test_query_answers_with_template_fallback(client):
	resp = client.post("/api/query", json={"query": "Who is the director of The Godfather?"})

	assert resp.status_code == 200
	assert resp.json() == {
		"query": "Who is the director of The Godfather?",
		"queryType": "director",
		"response": 'The director of "The Godfather" is Francis Ford Coppola.',
		"matches": 1,
		"llmUsed": True,
	}


@pytest.mark.parametrize("body", [{"query": ""}, {"query": "   "}, {}])
def test_empty_query_is_400(client, body):
	resp = client.post("/api/query", json=body)

	assert resp.status_code == 400
	assert resp.json() == {"error": "Query is required", "response": "Please provide a question about movies."}


def test_no_match_is_still_success(client):
	resp = client.post("/api/query", json={"query": "tell me about Qwxzyv"})

	assert resp.status_code == 200
	assert resp.json()["matches"] == 0
	assert resp.json()["response"]


def test_unexpected_error_is_500(client, monkeypatch):
	def explode(query):
		raise RuntimeError("boom")

	monkeypatch.setattr(api.app.state.engine, "answer", explode)

	resp = client.post("/api/query", json={"query": "anything"})

	assert resp.status_code == 500
	assert resp.json()["error"] == "Internal server error"


def test_health_reports_catalog_and_provider(client, movies):
	data = client.get("/api/health").json()

	assert data["status"] == "OK"
	assert data["moviesLoaded"] == len(movies)
	assert data["llmEnabled"] is True
	assert data["llmType"] == "stub"
	assert "timestamp" in data


def test_query_before_startup_is_503():
	api.app.state.engine = None

	resp = TestClient(api.app).post("/api/query", json={"query": "Heat"})

	assert resp.status_code == 503


def test_llm_used_false_when_generation_disabled(catalog):
	api.app.state.engine = MovieQAEngine(catalog, None)
	try:
		resp = TestClient(api.app).post("/api/query", json={"query": "Who is the director of The Godfather?"})
	finally:
		api.app.state.engine = None

	assert resp.status_code == 200
	assert resp.json()["llmUsed"] is False
