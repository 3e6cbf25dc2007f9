"""
Tests for the Markov HTTP API.
"""
import pytest
from fastapi.testclient import TestClient

from markov_text.api.routers import markov_router
from markov_text.app import app
from markov_text.config import settings


@pytest.fixture
def client():
    """Test client with an empty model cache."""
    markov_router.MODEL_CACHE.clear()
    yield TestClient(app)
    markov_router.MODEL_CACHE.clear()


@pytest.fixture
def trained(client, bridge_corpus):
    """Client with the bridge corpus trained as 'default'."""
    resp = client.post("/markov/train", json={"text": bridge_corpus})
    assert resp.status_code == 200
    return client


class TestServiceEndpoints:
    """Test suite for root and health endpoints."""

    def test_health(self, client):
        """Test health reports status and model count."""
        resp = client.get("/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["models"] == 0

    def test_root(self, client):
        """Test root lists endpoints."""
        resp = client.get("/")

        assert resp.status_code == 200
        assert resp.json()["endpoints"]["markov"] == "/markov/*"


class TestTrain:
    """Test suite for POST /markov/train."""

    def test_train_from_text(self, client, bridge_corpus):
        """Test training from raw text returns stats."""
        resp = client.post("/markov/train", json={"text": bridge_corpus, "model_name": "bridge"})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["model"] == "bridge"
        assert data["sentences"] == 2
        assert data["state_size"] == 2
        assert "bridge" in markov_router.MODEL_CACHE

    def test_train_from_corpus_lines(self, client):
        """Test training from a list of lines."""
        resp = client.post(
            "/markov/train",
            json={"corpus": ["alice likes green pears", "bob likes green apples"]},
        )

        assert resp.status_code == 200
        assert resp.json()["data"]["sentences"] == 2

    def test_train_empty(self, client):
        """Test empty corpus is a bad request."""
        resp = client.post("/markov/train", json={"corpus": []})

        assert resp.status_code == 400

    def test_train_only_rejected_lines(self, client):
        """Test corpus with no usable sentence is a bad request."""
        resp = client.post("/markov/train", json={"text": "(nothing usable)\n[here]"})

        assert resp.status_code == 400
        assert "no usable sentences" in resp.json()["detail"]

    def test_train_cache_full(self, client, bridge_corpus, monkeypatch):
        """Test new models are refused when the cache is full."""
        monkeypatch.setattr(settings, "MARKOV_MAX_MODELS", 1)

        assert client.post("/markov/train", json={"text": bridge_corpus}).status_code == 200
        # retraining an existing name is allowed
        assert client.post("/markov/train", json={"text": bridge_corpus}).status_code == 200
        resp = client.post("/markov/train", json={"text": bridge_corpus, "model_name": "other"})
        assert resp.status_code == 409


class TestGenerate:
    """Test suite for POST /markov/generate."""

    def test_generate(self, trained, bridge_crossovers):
        """Test generation returns a novel sentence."""
        resp = trained.post("/markov/generate", json={})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["text"] in bridge_crossovers
        assert data["texts"] == [data["text"]]

    def test_generate_count(self, trained, bridge_crossovers):
        """Test several sentences in one call."""
        resp = trained.post("/markov/generate", json={"count": 3})

        texts = resp.json()["data"]["texts"]
        assert len(texts) == 3
        assert all(t in bridge_crossovers for t in texts)

    def test_generate_exhausted(self, trained):
        """Test exhausted attempts give an empty text, not an error."""
        resp = trained.post("/markov/generate", json={"tries": 0})

        assert resp.status_code == 200
        assert resp.json()["data"]["text"] == ""

    def test_generate_with_start(self, trained):
        """Test start words seed the sentence."""
        resp = trained.post("/markov/generate", json={"start": "bob"})

        assert resp.status_code == 200
        assert resp.json()["data"]["text"] == "bob likes green pears"

    def test_generate_bad_start(self, trained):
        """Test unknown start words are a bad request."""
        resp = trained.post("/markov/generate", json={"start": "carol"})

        assert resp.status_code == 400

    def test_generate_unknown_model(self, client):
        """Test generating from an untrained model is not found."""
        resp = client.post("/markov/generate", json={"model_name": "missing"})

        assert resp.status_code == 404

    def test_generate_tries_over_limit(self, trained):
        """Test tries above the configured ceiling are rejected."""
        resp = trained.post(
            "/markov/generate", json={"tries": settings.MARKOV_MAX_TRIES + 1}
        )

        assert resp.status_code == 422

    def test_generate_tries_at_limit(self, trained, bridge_crossovers):
        """Test tries equal to the ceiling are accepted."""
        resp = trained.post("/markov/generate", json={"tries": settings.MARKOV_MAX_TRIES})

        assert resp.status_code == 200
        assert resp.json()["data"]["text"] in bridge_crossovers

    def test_generate_invalid_options(self, trained):
        """Test option validation."""
        resp = trained.post("/markov/generate", json={"count": 0})

        assert resp.status_code == 422


class TestModels:
    """Test suite for model listing and deletion."""

    def test_list_models(self, trained):
        """Test listing cached models."""
        resp = trained.get("/markov/models")

        assert resp.status_code == 200
        assert resp.json()["data"]["default"]["vocab_size"] == 8

    def test_delete_model(self, trained):
        """Test deleting a cached model."""
        resp = trained.delete("/markov/models/default")

        assert resp.status_code == 200
        assert "default" not in markov_router.MODEL_CACHE

    def test_delete_missing_model(self, client):
        """Test deleting an unknown model is not found."""
        resp = client.delete("/markov/models/missing")

        assert resp.status_code == 404
