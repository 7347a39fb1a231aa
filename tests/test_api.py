"""HTTP tests for the trip and factor routes."""
from emission_ledger.services.ledger import SECONDS_PER_DAY

OWNER = "0xowner"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_record_personal_vehicle_trip(client):
    resp = client.post(
        f"/accounts/{OWNER}/trips/personal-vehicle", json={"fuel_type": 0, "distance_km": 50}
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["index"] == 0
    assert body["trip"]["co2_emitted"] == 50 * 192

    count = client.get(f"/accounts/{OWNER}/trips/count").json()
    assert count == {"account": OWNER, "count": 1}

    trip = client.get(f"/accounts/{OWNER}/trips/0").json()
    assert trip["co2_emitted"] == 9600
    assert trip["vehicle_mode"] == 0
    assert trip["fuel_type"] == 0


def test_daily_emissions_reset(client, clock):
    client.post(
        f"/accounts/{OWNER}/trips/personal-vehicle", json={"fuel_type": 0, "distance_km": 50}
    )
    daily = client.get(f"/accounts/{OWNER}/emissions/daily").json()
    assert daily["daily_emissions"] == 9600
    assert daily["window_start"] == clock.now

    clock.advance(SECONDS_PER_DAY)
    client.post(
        f"/accounts/{OWNER}/trips/personal-vehicle", json={"fuel_type": 1, "distance_km": 30}
    )
    daily = client.get(f"/accounts/{OWNER}/emissions/daily").json()
    assert daily["daily_emissions"] == 30 * 171


def test_record_trip_with_names(client):
    resp = client.post(
        f"/accounts/{OWNER}/trips",
        json={"vehicle_mode": "airways", "fuel_type": "jet_fuel", "distance_km": 1000},
    )
    assert resp.status_code == 201
    assert resp.json()["trip"]["co2_emitted"] == 255000


def test_list_trips(client):
    for distance in (10, 20):
        client.post(
            f"/accounts/{OWNER}/trips",
            json={"vehicle_mode": 1, "fuel_type": 1, "distance_km": distance},
        )
    trips = client.get(f"/accounts/{OWNER}/trips").json()
    assert [t["distance_km"] for t in trips] == [10, 20]


def test_trip_index_out_of_range(client):
    client.post(
        f"/accounts/{OWNER}/trips/personal-vehicle", json={"fuel_type": 0, "distance_km": 50}
    )
    resp = client.get(f"/accounts/{OWNER}/trips/5")
    assert resp.status_code == 404
    assert "out of range" in resp.json()["detail"]


def test_unknown_fuel_type_rejected(client):
    resp = client.post(
        f"/accounts/{OWNER}/trips/personal-vehicle", json={"fuel_type": 42, "distance_km": 5}
    )
    assert resp.status_code == 422
    assert client.get(f"/accounts/{OWNER}/trips/count").json()["count"] == 0


def test_negative_distance_rejected(client):
    resp = client.post(
        f"/accounts/{OWNER}/trips",
        json={"vehicle_mode": 0, "fuel_type": 0, "distance_km": -3},
    )
    assert resp.status_code == 422


def test_unsupported_combination_rejected(client):
    resp = client.post(
        f"/accounts/{OWNER}/trips",
        json={"vehicle_mode": "airways", "fuel_type": "petrol", "distance_km": 100},
    )
    assert resp.status_code == 422
    assert "No emission factor" in resp.json()["detail"]


def test_unknown_account_is_empty(client):
    assert client.get("/accounts/0xnobody/trips/count").json()["count"] == 0
    daily = client.get("/accounts/0xnobody/emissions/daily").json()
    assert daily == {"account": "0xnobody", "daily_emissions": 0, "window_start": None}


def test_factors(client):
    factors = client.get("/factors").json()["factors"]
    lookup = {(f["vehicle_mode"], f["fuel_type"]): f["grams_per_km"] for f in factors}
    assert lookup[(0, 0)] == 192
    assert lookup[(0, 1)] == 171
