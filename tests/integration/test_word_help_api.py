"""
tests/integration/test_word_help_api.py

End-to-end HTTP tests through the FastAPI app with a stub model backend.

Verifies:
✔ POST /api/word-help success body {word, definition, imagePrompt}
✔ Missing / blank / non-string word → 400 {"error": "Word is required"}, no remote calls
✔ Not ready (background resolution pending or exhausted) → 500 "Server not ready"
✔ Stage failure → 500 "Failed to process word" with the stage message
✔ Single-stage endpoints /api/define-word and /api/generate-image-prompt
✔ GET /health model field: "initializing" until resolved
✔ GET /test diagnostic probe, including ?reprobe=true
✔ GET /test keeps its {success: false} body when the backend raises
✔ Blocking startup aborts on missing credential or exhausted candidates
✔ Startup rejects a zero timeout or unknown log level
"""

import pytest
from fastapi.testclient import TestClient

from config import KindredConfig
from inference import ModelRequest, ModelResponse, StubModelBackend
from kindred.errors import ConfigurationError, ResolutionExhausted
from main import create_app

CAT_DEFINITION = "A cat is a furry pet that purrs."
CAT_IMAGE = "A cute orange cartoon cat sitting in a garden."


def make_config(**overrides) -> KindredConfig:
    values = {
        "gemini_api_key": "test-key",
        "model_candidates": ("m1", "m2"),
        "probe_timeout_s": 1.0,
        "generation_timeout_s": 1.0,
    }
    values.update(overrides)
    return KindredConfig(**values)


def make_backend(**kwargs) -> StubModelBackend:
    kwargs.setdefault("outputs", {"define": CAT_DEFINITION, "describe_image": CAT_IMAGE})
    return StubModelBackend(**kwargs)


class RaisingBackend(StubModelBackend):
    """Stub that raises instead of answering for selected tasks."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.raising_tasks = set()

    async def generate(self, request: ModelRequest) -> ModelResponse:
        if request.task in self.raising_tasks:
            raise RuntimeError("socket closed")
        return await super().generate(request)


@pytest.fixture
def backend():
    return make_backend(failing_models={"m1"})


@pytest.fixture
def client(backend):
    with TestClient(create_app(config=make_config(), backend=backend)) as test_client:
        yield test_client


class TestWordHelpEndpoint:
    def test_cat_scenario(self, client):
        response = client.post("/api/word-help", json={"word": "cat"})

        assert response.status_code == 200
        assert response.json() == {
            "word": "cat",
            "definition": CAT_DEFINITION,
            "imagePrompt": CAT_IMAGE,
        }

    def test_uses_resolved_model(self, client, backend):
        client.post("/api/word-help", json={"word": "cat"})

        assert [c.model for c in backend.calls_for("define")] == ["m2"]
        assert [c.model for c in backend.calls_for("describe_image")] == ["m2"]

    def test_word_is_trimmed(self, client):
        response = client.post("/api/word-help", json={"word": "  cat "})

        assert response.json()["word"] == "cat"

    @pytest.mark.parametrize("payload", [{}, {"word": ""}, {"word": "   "}, {"word": None}, {"word": 7}])
    def test_word_required(self, client, backend, payload):
        calls_before = len(backend.calls)

        response = client.post("/api/word-help", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Word is required"}
        assert len(backend.calls) == calls_before

    def test_missing_body(self, client):
        response = client.post("/api/word-help")

        assert response.status_code == 400
        assert response.json() == {"error": "Word is required"}

    def test_definition_failure(self, client, backend):
        backend.failing_tasks.add("define")

        response = client.post("/api/word-help", json={"word": "cat"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to process word"
        assert "stubbed failure" in body["message"]
        assert backend.calls_for("describe_image") == []

    def test_image_failure_returns_no_partial_result(self, client, backend):
        backend.failing_tasks.add("describe_image")

        response = client.post("/api/word-help", json={"word": "cat"})

        assert response.status_code == 500
        assert "definition" not in response.json()


class TestSingleStageEndpoints:
    def test_define_word(self, client):
        response = client.post("/api/define-word", json={"word": "cat"})

        assert response.status_code == 200
        assert response.json() == {"word": "cat", "definition": CAT_DEFINITION}

    def test_generate_image_prompt(self, client):
        response = client.post("/api/generate-image-prompt", json={"word": " cat"})

        assert response.status_code == 200
        assert response.json() == {"word": "cat", "imagePrompt": CAT_IMAGE}

    def test_define_word_required(self, client):
        response = client.post("/api/define-word", json={"word": " "})

        assert response.status_code == 400

    def test_image_prompt_failure(self, client, backend):
        backend.failing_tasks.add("describe_image")

        response = client.post("/api/generate-image-prompt", json={"word": "cat"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process word"


class TestHealth:
    def test_health_resolved(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["model"] == "m2"
        assert body["credentialPresent"] is True
        assert body["timestamp"]

    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()

        assert body["endpoints"]["word_help"] == "POST /api/word-help"


class TestDiagnostic:
    def test_diagnostic_success(self, client):
        response = client.get("/test")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["model"] == "m2"
        assert body["response"] == "Hello"

    def test_reprobe_picks_new_model(self, client, backend):
        backend.failing_models.clear()

        body = client.get("/test", params={"reprobe": "true"}).json()

        assert body["model"] == "m1"
        assert client.get("/health").json()["model"] == "m1"

    def test_reprobe_exhausted(self, client, backend):
        backend.failing_models.update({"m1", "m2"})

        response = client.get("/test", params={"reprobe": "true"})

        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_backend_exception_keeps_failure_shape(self):
        backend = RaisingBackend()
        backend.raising_tasks.add("diagnostic")

        with TestClient(create_app(config=make_config(), backend=backend)) as client:
            response = client.get("/test")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "socket closed", "model": "m1"}


class TestBackgroundStartup:
    def test_requests_not_ready_while_probing(self):
        backend = make_backend(delay_s=60)
        app = create_app(config=make_config(startup_resolution="background"), backend=backend)

        with TestClient(app) as client:
            health = client.get("/health").json()
            response = client.post("/api/word-help", json={"word": "cat"})

        assert health["model"] == "initializing"
        assert response.status_code == 500
        assert response.json()["error"] == "Server not ready"
        assert "try again" in response.json()["message"]
        assert backend.calls_for("define") == []

    def test_exhausted_stays_up_and_recovers_via_diagnostic(self):
        backend = make_backend(failing_models={"m1", "m2"})
        app = create_app(config=make_config(startup_resolution="background"), backend=backend)

        with TestClient(app) as client:
            not_ready = client.post("/api/word-help", json={"word": "cat"})
            backend.failing_models.clear()
            diagnostic = client.get("/test")
            ready = client.post("/api/word-help", json={"word": "cat"})

        assert not_ready.status_code == 500
        assert not_ready.json()["error"] == "Server not ready"
        assert diagnostic.json()["success"] is True
        assert ready.status_code == 200


class TestBlockingStartup:
    def test_missing_credential_aborts_startup(self):
        app = create_app(config=make_config(gemini_api_key=""), backend=make_backend())

        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass

    def test_exhausted_candidates_abort_startup(self):
        backend = make_backend(failing_models={"m1", "m2"})
        app = create_app(config=make_config(), backend=backend)

        with pytest.raises(ResolutionExhausted):
            with TestClient(app):
                pass

        assert [c.model for c in backend.calls] == ["m1", "m2"]

    @pytest.mark.parametrize("overrides", [{"generation_timeout_s": 0}, {"log_level": "LOUD"}])
    def test_bad_settings_abort_startup(self, overrides):
        backend = make_backend()
        app = create_app(config=make_config(**overrides), backend=backend)

        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass

        assert backend.calls == []
