import pytest
from fastapi.testclient import TestClient

from tengwar.config import settings
from tengwar import main as main_module
from tengwar.main import create_app
from tengwar.mappings import SPECIAL_WORDS
from tengwar.metrics import registry
from tengwar.transcriber import TengwarTranscriber, reset_transcriber


@pytest.fixture()
def client(transcriber: TengwarTranscriber) -> TestClient:
    """固定の発音辞書を持つ変換器を差し込んだテストクライアント。"""

    reset_transcriber(transcriber)
    registry.reset()
    return TestClient(create_app())


def test_health(client: TestClient) -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers.get("X-Request-ID")


def test_metrics_reports_paths_and_cache(client: TestClient) -> None:
    client.get("/healthz")
    client.post("/api/transcribe", json={"words": ["cake", "cake"]})

    body = client.get("/metrics").json()

    assert body["paths"]["/healthz"]["count"] == 1
    assert body["paths"]["/api/transcribe"]["errors"] == 0
    assert body["cache"] == {"size": 1, "hits": 1, "misses": 1}
    assert body["engine"]["words_transcribed"] == 2
    assert body["engine"]["cache_hit_ratio"] == 0.5


def test_metrics_count_batch_fragments(client: TestClient) -> None:
    client.post("/api/transcribe/batch", json={"texts": ["Bake of the cake.", "42"]})

    engine = client.get("/metrics").json()["engine"]

    assert engine["batches"] == 1
    assert engine["batch_texts"] == 2
    assert engine["tengwar_fragments"] == 3
    assert engine["words_transcribed"] == 3
    assert engine["fragments"] >= 5


def test_transcribe_words(client: TestClient, transcriber: TengwarTranscriber) -> None:
    resp = client.post("/api/transcribe", json={"words": ["know", "the"]})

    assert resp.status_code == 200
    results = resp.json()["results"]
    assert results[0] == {"word": "know", "tengwar": transcriber.transcribe("know")}
    assert results[1] == {"word": "the", "tengwar": SPECIAL_WORDS["the"]}


def test_transcribe_requires_words(client: TestClient) -> None:
    resp = client.post("/api/transcribe", json={"words": []})
    assert resp.status_code == 422


def test_batch_returns_fragments(client: TestClient) -> None:
    resp = client.post("/api/transcribe/batch", json={"texts": ["Bake of the cake.", "42"]})

    assert resp.status_code == 200
    first, second = resp.json()["results"]
    assert [f["original"] for f in first if f["is_tengwar"]] == ["Bake", "of the", "cake"]
    assert first[2]["text"] == SPECIAL_WORDS["ofthe"]
    assert first[-1] == {"text": ".", "is_tengwar": False, "original": None}
    assert second == [{"text": "42", "is_tengwar": False, "original": None}]


def test_batch_rejects_too_many_texts(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "batch_max_texts", 1)
    resp = client.post("/api/transcribe/batch", json={"texts": ["a", "b"]})
    assert resp.status_code == 422


def test_batch_rejects_long_text(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "batch_max_chars", 5)
    resp = client.post("/api/transcribe/batch", json={"texts": ["short", "much too long"]})
    assert resp.status_code == 422


def test_align_endpoint(client: TestClient) -> None:
    resp = client.get("/api/align/know")

    assert resp.status_code == 200
    body = resp.json()
    assert body["word"] == "know"
    assert body["normalized"] == "now"
    assert body["pronunciation"] == ["N", "OW1"]
    assert [item["phoneme"] for item in body["alignment"]] == ["N", "OW1", None]


def test_align_rejects_blank_word(client: TestClient) -> None:
    resp = client.get("/api/align/%20")
    assert resp.status_code == 400


def test_run_serves_app_with_configured_address(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, dict[str, object]]] = []
    monkeypatch.setattr(main_module.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(settings, "api_port", 9001)

    main_module.run()

    assert len(calls) == 1
    target, kwargs = calls[0]
    assert target == "tengwar.main:app"
    assert kwargs["host"] == settings.api_host
    assert kwargs["port"] == 9001
