def test_list_and_get(client, farm):
    response = client.get("/api/farms")
    assert response.status_code == 200
    assert [f["code"] for f in response.json()] == ["FA-001"]

    response = client.get(f"/api/farms/{farm['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Ferme Atlas"
    assert body["active"] is True
    assert "createdAt" in body


def test_get_missing_farm(client):
    response = client.get("/api/farms/999")
    assert response.status_code == 404
    assert response.json()["error_type"] == "not_found"


def test_duplicate_code_is_case_insensitive(client, farm):
    response = client.post("/api/farms", json={"name": "Autre", "location": "Rabat", "code": "fa-001"})
    assert response.status_code == 409
    assert response.json()["error_type"] == "conflict"


def test_missing_name_is_rejected(client):
    response = client.post("/api/farms", json={"location": "Rabat", "code": "FR-009"})
    assert response.status_code == 422
    body = response.json()
    assert body["error_type"] == "validation_error"
    assert body["errors"]


def test_partial_update(client, farm):
    response = client.put(f"/api/farms/{farm['id']}", json={"active": False})
    assert response.status_code == 200
    body = response.json()
    assert body["active"] is False
    assert body["name"] == "Ferme Atlas"


def test_update_to_taken_code(client, farm):
    other = client.post("/api/farms", json={"name": "Ferme Souss", "location": "Agadir", "code": "FS-002"}).json()
    response = client.put(f"/api/farms/{other['id']}", json={"code": "FA-001"})
    assert response.status_code == 409


def test_update_keeps_own_code(client, farm):
    response = client.put(f"/api/farms/{farm['id']}", json={"code": "FA-001", "name": "Ferme Atlas Nord"})
    assert response.status_code == 200
    assert response.json()["name"] == "Ferme Atlas Nord"


def test_update_rejects_null_for_required_fields(client, farm):
    response = client.put(f"/api/farms/{farm['id']}", json={"name": None})

    assert response.status_code == 422
    body = response.json()
    assert body["error_type"] == "validation_error"
    assert body["errors"][0]["loc"] == ["name"]
    assert client.get(f"/api/farms/{farm['id']}").json()["name"] == "Ferme Atlas"


def test_update_accepts_null_description(client, farm):
    client.put(f"/api/farms/{farm['id']}", json={"description": "Avocats Hass"})
    response = client.put(f"/api/farms/{farm['id']}", json={"description": None})
    assert response.status_code == 200
    assert response.json()["description"] is None


def test_update_missing_farm(client):
    assert client.put("/api/farms/999", json={"name": "x"}).status_code == 404


def test_delete_farm_without_lots(client, farm):
    assert client.delete(f"/api/farms/{farm['id']}").status_code == 204
    assert client.get(f"/api/farms/{farm['id']}").status_code == 404


def test_delete_farm_with_lots_conflicts(client, farm):
    client.post(
        "/api/lots",
        json={"farmId": farm["id"], "harvestDate": "2024-03-01T08:00:00Z", "initialQuantity": 1000},
    )
    response = client.delete(f"/api/farms/{farm['id']}")
    assert response.status_code == 409
    assert client.get(f"/api/farms/{farm['id']}").status_code == 200
