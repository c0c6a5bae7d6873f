import pytest
from fastapi.testclient import TestClient

from main import create_app, wire_recipe_store

UNUSED_ID = "000000000000000000000000"

SOUP = {
    "recipe_name": "Pumpkin soup",
    "oven_fan": "high",
    "oven_temp": {"amount": 180, "unit": "celsius"},
    "oven_time": 40,
    "ingredients": [
        {
            "ingredient": {
                "amounts": [{"amount": 1, "unit": "kg"}],
                "processing": ["diced"],
                "ingredient_name": "pumpkin",
            },
            "substitutions": [{"amounts": [{"amount": 1, "unit": "kg"}], "ingredient_name": "squash"}],
        }
    ],
    "steps": [
        {"step": "Roast the pumpkin."},
        {"step": "Blend.", "haccp": {"control_point": "Hold above 63C"}},
    ],
    "yields": [{"amount": 4}],
}


def _client(col) -> TestClient:
    app = create_app()
    wire_recipe_store(app, col)
    return TestClient(app)


@pytest.fixture
def client(collection) -> TestClient:
    return _client(collection)


def test_create_and_get(client: TestClient) -> None:
    r = client.post("/recipe", json=SOUP)
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == 201
    recipe_uuid = body["recipe_uuid"]

    r = client.get(f"/recipe/{recipe_uuid}")
    assert r.status_code == 200
    got = r.json()
    assert got["recipe_uuid"] == recipe_uuid
    assert got["oven_fan"] == "High"
    assert got["oven_temp"] == {"amount": 180.0, "unit": "Celsius"}
    assert got["yields"] == [{"amount": 4.0, "unit": "servings"}]
    assert got["steps"][1]["haccp"]["control_point"] == "Hold above 63C"
    assert got["ingredients"][0]["substitutions"][0]["ingredient_name"] == "squash"
    assert got["notes"] is None


def test_list(client: TestClient) -> None:
    client.post("/recipe", json={"recipe_name": "One"})
    client.post("/recipe", json={"recipe_name": "Two"})
    r = client.get("/recipe")
    assert r.status_code == 200
    assert sorted(x["recipe_name"] for x in r.json()) == ["One", "Two"]


def test_put_replaces_whole_recipe(client: TestClient) -> None:
    recipe_uuid = client.post("/recipe", json=SOUP).json()["recipe_uuid"]

    r = client.put(f"/recipe/{recipe_uuid}", json={"recipe_name": "Plain soup"})
    assert r.status_code == 200
    assert r.json() == {"status": 200}

    got = client.get(f"/recipe/{recipe_uuid}").json()
    assert got["recipe_name"] == "Plain soup"
    assert got["steps"] is None
    assert got["oven_fan"] is None


def test_delete(client: TestClient) -> None:
    recipe_uuid = client.post("/recipe", json={"recipe_name": "Toast"}).json()["recipe_uuid"]
    assert client.delete(f"/recipe/{recipe_uuid}").status_code == 200
    assert client.get(f"/recipe/{recipe_uuid}").status_code == 404


def test_not_found(client: TestClient) -> None:
    assert client.get(f"/recipe/{UNUSED_ID}").status_code == 404
    assert client.get("/recipe/garbage").status_code == 404
    assert client.put(f"/recipe/{UNUSED_ID}", json={}).status_code == 404
    assert client.delete(f"/recipe/{UNUSED_ID}").status_code == 404


def test_malformed_id_on_write_is_bad_request(client: TestClient) -> None:
    assert client.put("/recipe/garbage", json={}).status_code == 400
    assert client.delete("/recipe/garbage").status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        {"oven_fan": "turbo"},
        {"oven_temp": {"amount": 180, "unit": "kelvin"}},
        {"oven_time": -3},
        {"steps": [{"notes": "no step text"}]},
        {"source_book": {"authors": ["A. Cook"]}},
        {"steps": [{"step": "Cool", "haccp": {"control_point": "Cover", "critical_control_point": "Below 5C"}}]},
    ],
)
def test_invalid_bodies_are_rejected(client: TestClient, body) -> None:
    assert client.post("/recipe", json=body).status_code == 422


def test_corrupt_record_is_distinct_from_missing(client: TestClient, collection) -> None:
    recipe_uuid = collection.seed({"steps": [{}]})
    r = client.get(f"/recipe/{recipe_uuid}")
    assert r.status_code == 500
    assert "stored recipe is invalid" in r.json()["detail"]
    assert client.get("/recipe").status_code == 500


def test_store_down(unreachable_collection) -> None:
    client = _client(unreachable_collection)
    assert client.get("/recipe").status_code == 503
    assert client.post("/recipe", json={}).status_code == 503


def test_use_cases_share_one_repository(collection) -> None:
    app = create_app()
    wire_recipe_store(app, collection)
    names = ("create_recipe", "get_recipe", "list_recipes", "edit_recipe", "delete_recipe")
    repos = {id(getattr(app.state, n).recipe_repo) for n in names}
    assert len(repos) == 1
    assert not hasattr(app.state, "recipe_repo")
