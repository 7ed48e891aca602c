import inspect

import pytest
from fastapi.testclient import TestClient

from optimizer import batch
from optimizer.api import routes
from optimizer.conversion.variants import fixed_variants
from optimizer.main import app

from conftest import make_image


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def custom_config(**overrides):
    config = {
        "width": "1000",
        "medium_percent": "50",
        "small_percent": "25,5",
        "quality_small": "0",
        "quality_medium": "50",
        "quality_large": "100",
    }
    config.update(overrides)
    return config


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_variants_lists_fixed_table(client):
    data = client.get("/api/variants", params={"lang": "en"}).json()
    assert data["fixed"] == [
        {"name": "small", "width": 400, "quality": 75},
        {"name": "medium", "width": 800, "quality": 80},
        {"name": "large", "width": 1200, "quality": 85},
    ]
    assert set(data["custom_defaults"]) == {
        "width", "medium_percent", "small_percent", "quality_small", "quality_medium", "quality_large",
    }


def test_resolve_custom_variants(client):
    r = client.post("/api/variants/resolve", params={"lang": "en"}, json={"mode": "custom", "config": custom_config()})
    assert r.status_code == 200
    assert [v["width"] for v in r.json()["variants"]] == [255, 500, 1000]


def test_resolve_reports_invalid_field(client):
    r = client.post("/api/variants/resolve", json={"mode": "custom", "config": custom_config(width="-5")})
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "width"


def test_resolve_rejects_overflowing_percent(client):
    r = client.post("/api/variants/resolve", json={"mode": "custom", "config": custom_config(medium_percent="1e308")})
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "medium_percent"


def test_list_images(client, source_folder):
    make_image(source_folder / "b.png", size=(20, 10))
    make_image(source_folder / "a.jpg", size=(20, 10))
    (source_folder / "notes.txt").write_text("x")

    data = client.get("/api/images", params={"folder": str(source_folder)}).json()

    assert data["files"] == ["a.jpg", "b.png"]
    assert data["count"] == 2


def test_list_images_missing_folder(client, tmp_path):
    r = client.get("/api/images", params={"folder": str(tmp_path / "missing")})
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "folder"


def test_batch_runs_to_completion(client, source_folder):
    make_image(source_folder / "foto.jpg", size=(1600, 1200), fmt="JPEG")

    r = client.post("/api/batch", params={"lang": "es"}, json={"folder": str(source_folder)})
    assert r.status_code == 200
    started = r.json()
    assert started["status"] == "processing"
    assert started["total_steps"] == 3

    status = client.get(f"/api/batch/{started['batch_id']}").json()
    assert status["status"] == "completed"
    assert (status["completed_steps"], status["total_steps"]) == (3, 3)
    assert status["percentage"] == 100.0
    assert status["percentage_text"] == "100%"
    assert sorted(status["output_files"]) == ["foto_chico.webp", "foto_grande.webp", "foto_mediano.webp"]
    assert "resultado" in status["status_text"]
    assert status["error"] is None


def test_batch_with_custom_variants(client, source_folder):
    make_image(source_folder / "foto.png", size=(2000, 1000))

    r = client.post(
        "/api/batch",
        params={"lang": "en"},
        json={"folder": str(source_folder), "mode": "custom", "config": custom_config()},
    )
    status = client.get(f"/api/batch/{r.json()['batch_id']}").json()

    assert status["status"] == "completed"
    assert sorted(status["output_files"]) == ["foto_large.webp", "foto_medium.webp", "foto_small.webp"]


def test_batch_invalid_config_starts_nothing(client, source_folder):
    make_image(source_folder / "foto.jpg", size=(100, 100))

    r = client.post(
        "/api/batch",
        json={"folder": str(source_folder), "mode": "custom", "config": custom_config(quality_medium="101")},
    )

    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "quality_medium"
    assert not (source_folder / "resultado").exists()
    assert batch._batches == {}


def test_batch_empty_folder(client, source_folder):
    r = client.post("/api/batch", params={"lang": "en"}, json={"folder": str(source_folder)})
    data = r.json()
    assert data["status"] == "empty"
    assert data["batch_id"] is None
    assert "no supported images" in data["message"]
    assert not (source_folder / "resultado").exists()


def test_batch_failure_is_reported(client, source_folder):
    (source_folder / "broken.png").write_bytes(b"garbage")

    r = client.post("/api/batch", params={"lang": "en"}, json={"folder": str(source_folder)})
    status = client.get(f"/api/batch/{r.json()['batch_id']}").json()

    assert status["status"] == "failed"
    assert status["completed_steps"] == 0
    assert status["error"].startswith("An error occurred while converting the images:")


def test_second_batch_is_refused_while_one_is_running(client, source_folder):
    make_image(source_folder / "foto.jpg", size=(100, 100))
    batch.create_batch(str(source_folder), fixed_variants(), 3)

    r = client.post("/api/batch", json={"folder": str(source_folder)})

    assert r.status_code == 409


def test_unknown_batch(client):
    assert client.get("/api/batch/does-not-exist").status_code == 404


def test_batch_overflowing_percent_starts_nothing(client, source_folder):
    make_image(source_folder / "foto.jpg", size=(100, 100))

    r = client.post(
        "/api/batch",
        json={"folder": str(source_folder), "mode": "custom", "config": custom_config(small_percent="1e308")},
    )

    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "small_percent"
    assert not (source_folder / "resultado").exists()


def test_start_batch_runs_in_threadpool():
    assert not inspect.iscoroutinefunction(routes.start_batch)
