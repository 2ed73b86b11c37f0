from datetime import datetime, timezone

import pytest


def _create_lot(client, farm_id, harvest_date="2024-03-01T08:00:00Z", quantity=1000, **extra):
    payload = {"farmId": farm_id, "harvestDate": harvest_date, "initialQuantity": quantity}
    payload.update(extra)
    response = client.post("/api/lots", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _parse(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _record(client, lot_id, activity_type, date_performed="2024-03-02T10:00:00Z", **extra):
    payload = {
        "activityType": activity_type,
        "datePerformed": date_performed,
        "quantity": 980,
        "operatorName": "Karim",
    }
    payload.update(extra)
    return client.post(f"/api/lots/{lot_id}/activities", json=payload)


def test_create_lot_scenario(client, farm):
    lot = _create_lot(client, farm["id"])

    assert lot["lotNumber"] == "AV-240301-001"
    assert lot["currentStatus"] == "harvested"
    assert lot["initialQuantity"] == 1000

    activities = client.get(f"/api/lots/{lot['id']}/activities").json()
    assert len(activities) == 1
    assert activities[0]["activityType"] == "harvest"
    assert activities[0]["quantity"] == 1000
    assert activities[0]["operatorName"] == "System User"
    assert activities[0]["notes"] == "Création initiale du lot"


def test_operator_header_names_initial_activity(client, farm):
    response = client.post(
        "/api/lots",
        json={"farmId": farm["id"], "harvestDate": "2024-03-01T08:00:00Z", "initialQuantity": 500},
        headers={"X-Operator-Name": "Fatima"},
    )
    lot = response.json()
    activities = client.get(f"/api/lots/{lot['id']}/activities").json()
    assert activities[0]["operatorName"] == "Fatima"


def test_sequence_increments_per_day(client, farm):
    assert _create_lot(client, farm["id"])["lotNumber"] == "AV-240301-001"
    assert _create_lot(client, farm["id"], "2024-03-01T15:00:00Z")["lotNumber"] == "AV-240301-002"
    assert _create_lot(client, farm["id"], "2024-03-02T07:00:00Z")["lotNumber"] == "AV-240302-001"


def test_snake_case_input_is_accepted(client, farm):
    response = client.post(
        "/api/lots",
        json={"farm_id": farm["id"], "harvest_date": "2024-03-01T08:00:00Z", "initial_quantity": 10},
    )
    assert response.status_code == 201


def test_create_lot_unknown_farm(client):
    response = client.post(
        "/api/lots", json={"farmId": 999, "harvestDate": "2024-03-01T08:00:00Z", "initialQuantity": 10}
    )
    assert response.status_code == 404


def test_create_lot_rejects_zero_quantity(client, farm):
    response = client.post(
        "/api/lots", json={"farmId": farm["id"], "harvestDate": "2024-03-01T08:00:00Z", "initialQuantity": 0}
    )
    assert response.status_code == 422


def test_duplicate_explicit_lot_number(client, farm):
    _create_lot(client, farm["id"], lotNumber="AV-240301-777")
    response = client.post(
        "/api/lots",
        json={
            "farmId": farm["id"],
            "harvestDate": "2024-03-01T08:00:00Z",
            "initialQuantity": 10,
            "lotNumber": "AV-240301-777",
        },
    )
    assert response.status_code == 409


def test_get_lot_and_by_number(client, farm):
    lot = _create_lot(client, farm["id"])

    assert client.get(f"/api/lots/{lot['id']}").json()["lotNumber"] == "AV-240301-001"
    by_number = client.get("/api/lots/number/AV-240301-001")
    assert by_number.status_code == 200
    assert by_number.json()["id"] == lot["id"]

    assert client.get("/api/lots/999").status_code == 404
    assert client.get("/api/lots/number/AV-000000-000").status_code == 404


def test_ship_activity_scenario(client, farm):
    lot = _create_lot(client, farm["id"])

    response = _record(client, lot["id"], "ship")

    assert response.status_code == 201
    assert response.json()["activityType"] == "ship"
    assert response.json()["lotId"] == lot["id"]
    assert client.get(f"/api/lots/{lot['id']}").json()["currentStatus"] == "shipped"


def test_activities_are_chronological(client, farm):
    lot = _create_lot(client, farm["id"])
    _record(client, lot["id"], "ship", "2024-03-04T10:00:00Z")
    _record(client, lot["id"], "package", "2024-03-02T10:00:00Z")

    activities = client.get(f"/api/lots/{lot['id']}/activities").json()

    assert [a["activityType"] for a in activities] == ["harvest", "package", "ship"]
    # Status comes from the last recorded activity
    assert client.get(f"/api/lots/{lot['id']}").json()["currentStatus"] == "packaged"


def test_activity_on_missing_lot(client):
    assert _record(client, 999, "ship").status_code == 404
    assert client.get("/api/lots/999/activities").status_code == 404


@pytest.mark.parametrize("payload_override", [{"activityType": "teleport"}, {"quantity": 0}, {"operatorName": ""}])
def test_invalid_activity(client, farm, payload_override):
    lot = _create_lot(client, farm["id"])
    response = _record(client, lot["id"], "cool", **payload_override)
    assert response.status_code == 422


def test_update_lot_cannot_change_status(client, farm):
    lot = _create_lot(client, farm["id"])

    response = client.put(
        f"/api/lots/{lot['id']}",
        json={"notes": "Calibre 20", "initialQuantity": 950, "currentStatus": "delivered"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["notes"] == "Calibre 20"
    assert body["initialQuantity"] == 950
    assert body["currentStatus"] == "harvested"


@pytest.mark.parametrize("field", ["harvestDate", "initialQuantity"])
def test_update_lot_rejects_null_for_required_fields(client, farm, field):
    lot = _create_lot(client, farm["id"])

    response = client.put(f"/api/lots/{lot['id']}", json={field: None})

    assert response.status_code == 422
    assert response.json()["errors"][0]["loc"] == [field]
    assert client.get(f"/api/lots/{lot['id']}").json()[field] == lot[field]


def test_update_lot_clears_notes(client, farm):
    lot = _create_lot(client, farm["id"], notes="Calibre 18")
    response = client.put(f"/api/lots/{lot['id']}", json={"notes": None})
    assert response.status_code == 200
    assert response.json()["notes"] is None


def test_datetimes_are_returned_in_utc(client, farm):
    lot = _create_lot(client, farm["id"], "2024-03-01T10:00:00+02:00")
    _record(client, lot["id"], "ship", date_performed="2024-03-02T10:00:00Z")

    fetched = client.get(f"/api/lots/{lot['id']}").json()
    harvest = _parse(fetched["harvestDate"])
    assert harvest.utcoffset().total_seconds() == 0
    assert harvest == datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
    assert _parse(fetched["createdAt"]).tzinfo is not None

    shipped = client.get(f"/api/lots/{lot['id']}/activities").json()[-1]
    assert _parse(shipped["datePerformed"]) == datetime(2024, 3, 2, 10, 0, tzinfo=timezone.utc)


def test_malformed_explicit_lot_number(client, farm):
    response = client.post(
        "/api/lots",
        json={"farmId": farm["id"], "harvestDate": "2024-03-01T08:00:00Z", "initialQuantity": 10, "lotNumber": "LOT 1"},
    )
    assert response.status_code == 422
    assert response.json()["errors"][0]["loc"] == ["lot_number"]
    assert client.get("/api/lots").json() == []


def test_list_filters(client, farm):
    other = client.post("/api/farms", json={"name": "Ferme Souss", "location": "Agadir", "code": "FS-002"}).json()
    first = _create_lot(client, farm["id"], "2024-03-01T08:00:00Z")
    second = _create_lot(client, other["id"], "2024-03-10T08:00:00Z")
    third = _create_lot(client, farm["id"], "2024-03-20T08:00:00Z")
    _record(client, third["id"], "ship")

    all_ids = [lot["id"] for lot in client.get("/api/lots").json()]
    assert all_ids == [third["id"], second["id"], first["id"]]

    by_farm = client.get("/api/lots", params={"farmId": farm["id"]}).json()
    assert {lot["id"] for lot in by_farm} == {first["id"], third["id"]}

    shipped = client.get("/api/lots", params={"status": "shipped"}).json()
    assert [lot["id"] for lot in shipped] == [third["id"]]

    in_range = client.get("/api/lots", params={"startDate": "2024-03-05", "endDate": "2024-03-10"}).json()
    assert [lot["id"] for lot in in_range] == [second["id"]]

    # A single bound is ignored
    only_start = client.get("/api/lots", params={"startDate": "2024-03-05"}).json()
    assert len(only_start) == 3


def test_barcode_payload(client, farm):
    lot = _create_lot(client, farm["id"])

    response = client.get(f"/api/lots/{lot['id']}/barcode")

    assert response.status_code == 200
    body = response.json()
    assert body["lotNumber"] == "AV-240301-001"
    assert body["farmName"] == "Ferme Atlas"
    assert body["harvestDate"] == "01/03/2024"
    assert body["barcodeImage"].startswith("data:image/png;base64,")


def test_pdf_report(client, farm):
    lot = _create_lot(client, farm["id"])
    _record(client, lot["id"], "package")

    response = client.get(f"/api/lots/{lot['id']}/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == "attachment; filename=lot-AV-240301-001.pdf"
    assert response.content.startswith(b"%PDF")


def test_pdf_missing_lot(client):
    assert client.get("/api/lots/999/pdf").status_code == 404
