def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_list_active_only(client, seed_values):
    r = client.get("/webknot-values/list", params={"activeOnly": "true"})
    assert r.status_code == 200
    data = r.json()
    titles = [v["valueTitle"] for v in data["data"]]
    assert titles == ["Own The Outcome", "Integrity"]
    assert data["nextCursor"] is None


def test_list_all_uses_legacy_shape(client, seed_values):
    r = client.get("/webknot-values/list", params={"activeOnly": "false"})
    assert r.status_code == 200
    rows = r.json()["data"]
    assert len(rows) == 3
    assert rows[0] == {
        "valueId": 1,
        "valueTitle": "Own The Outcome",
        "valuePillar": {"name": "Ownership"},
        "valueDescription": "Results, not tasks.",
        "active": True,
    }


def test_list_cursor_pages(client, seed_values):
    r = client.get("/webknot-values/list", params={"activeOnly": "false", "limit": 2})
    page1 = r.json()
    assert [v["valueId"] for v in page1["data"]] == [1, 2]
    assert page1["nextCursor"] == "2"

    r = client.get("/webknot-values/list",
                   params={"activeOnly": "false", "limit": 2, "cursor": page1["nextCursor"]})
    page2 = r.json()
    assert [v["valueId"] for v in page2["data"]] == [3]
    assert page2["nextCursor"] is None


def test_list_bad_cursor(client, seed_values):
    r = client.get("/webknot-values/list", params={"cursor": "not-a-number"})
    assert r.status_code == 400
    assert r.json() == {"message": "Invalid cursor"}


def test_add_accepts_legacy_names(client, seed_values):
    r = client.post("/webknot-values/add", json={
        "valueTitle": "Customer First", "valuePillarName": "Impact", "valueDescription": "Start there.",
    })
    assert r.status_code == 200
    body = r.json()
    assert body["valueTitle"] == "Customer First"
    assert body["valuePillar"] == {"name": "Impact"}
    assert body["active"] is True


def test_add_missing_title_is_400_error_body(client, seed_values):
    r = client.post("/webknot-values/add", json={"title": "  ", "pillar": "P"})
    assert r.status_code == 400
    assert "title" in r.json()["error"].lower()


def test_update_and_404(client, seed_values):
    r = client.put("/webknot-values/update/2", json={"title": "Integrity+", "pillar": "Ownership"})
    assert r.status_code == 200
    assert r.json()["valueTitle"] == "Integrity+"

    r = client.put("/webknot-values/update/999", json={"title": "x", "pillar": "y"})
    assert r.status_code == 404
    assert r.json() == {"message": "Value not found"}


def test_delete(client, seed_values):
    r = client.delete("/webknot-values/delete/1")
    assert r.status_code == 204
    r = client.delete("/webknot-values/delete/1")
    assert r.status_code == 404
    ids = [v["valueId"] for v in client.get("/webknot-values/list").json()["data"]]
    assert 1 not in ids
