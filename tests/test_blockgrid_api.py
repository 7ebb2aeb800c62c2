"""
Tests POST /api/block-grid/validate + GET /health
"""
import sys, os, json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

AREA = "4a3b2c1d-0e9f-4a8b-9c7d-6e5f4a3b2c1d"


@pytest.fixture
def client(tmp_path):
    os.environ["DB_PATH"] = str(tmp_path / "test.db")
    from gridcms.api.main import app
    with TestClient(app) as c:
        yield c


def _value(n_root, n_area=0):
    """n_root blocs racine ; le premier porte une zone AREA de n_area blocs."""
    area_items = [{"contentUdi": f"umb://element/area{i}", "areas": []} for i in range(n_area)]
    layout = [{"contentUdi": f"umb://element/root{i}", "areas": []} for i in range(n_root)]
    if layout:
        layout[0]["areas"] = [{"key": AREA, "items": area_items}]
    udis = [b["contentUdi"] for b in layout + area_items]
    return {
        "layout": {"Umbraco.BlockGrid": layout},
        "contentData": [{"udi": u} for u in udis],
    }


CONFIG = {
    "validationLimit": {"min": 1, "max": 3},
    "blocks": [{"areas": [{"key": AREA, "maxAllowed": 2}]}],
}


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_valid_value(client):
    r = client.post("/api/block-grid/validate", json={"value": _value(2, 1), "configuration": CONFIG})
    assert r.status_code == 200
    assert r.json() == {"valid": True, "failures": []}


def test_value_as_json_string(client):
    r = client.post("/api/block-grid/validate", json={"value": json.dumps(_value(5)), "configuration": CONFIG})
    body = r.json()
    assert body["valid"] is False
    assert body["failures"][0]["member_names"] == ["maxCount"]
    assert "Maximum 3 entries" in body["failures"][0]["message"]


def test_global_then_area_failures(client):
    r = client.post("/api/block-grid/validate", json={"value": _value(4, 3), "configuration": CONFIG})
    failures = r.json()["failures"]
    assert len(failures) == 2
    assert failures[0]["member_names"] == ["maxCount"]
    assert failures[1]["member_names"] == []


def test_french_messages(client):
    r = client.post("/api/block-grid/validate?lang=fr", json={"value": _value(1, 3), "configuration": CONFIG})
    failures = r.json()["failures"]
    assert len(failures) == 1
    assert "zones" in failures[0]["message"]


def test_unknown_lang_404(client):
    r = client.post("/api/block-grid/validate?lang=zz", json={"value": None, "configuration": CONFIG})
    assert r.status_code == 404


@pytest.mark.parametrize("configuration", [
    None,
    "config",
    42,
    [1, 2],
    {"blocks": "pas une liste"},
    {"validationLimit": {"max": "beaucoup"}},
])
def test_missing_or_invalid_configuration_is_valid(client, configuration):
    r = client.post("/api/block-grid/validate", json={"value": _value(9, 9), "configuration": configuration})
    assert r.json() == {"valid": True, "failures": []}


def test_null_value(client):
    r = client.post("/api/block-grid/validate", json={"value": None, "configuration": CONFIG})
    assert r.json()["valid"] is True
