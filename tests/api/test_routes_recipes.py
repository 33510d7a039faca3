"""HTTP tests for /recipes - search, detail, create, update, delete, reviews.

Run in-process with TestClient against the seeded in-memory store.
"""

import asyncio

import pytest
from bson import ObjectId

from recipe_book.db.init import RECIPES

TOM_YUM = {
    "name": "Tom Yum",
    "cuisine": "Thai",
    "prepTime": 10,
    "cookTime": 20,
    "servings": 2,
    "ingredients": [{"name": "shrimp", "quantity": "200", "unit": "g"}],
    "instructions": ["Boil stock."],
    "tags": ["spicy"],
}


def _recipe_id(app_store, name):
    doc = asyncio.run(app_store.find_one(RECIPES, {"name": name}))
    return str(doc["_id"])


class TestRoot:
    """Tests for the service root."""

    def test_hello(self, client):
        assert client.get("/").json() == {"message": "Hello world"}


class TestSearch:
    """Tests for GET /recipes/search."""

    def test_no_filters_returns_all(self, client):
        res = client.get("/recipes/search")
        assert res.status_code == 200
        assert len(res.json()["recipes"]) == 5

    def test_ingredients_chicken_and_yogurt(self, client):
        res = client.get("/recipes/search", params={"ingredients": "chicken,yogurt"})
        names = [r["name"] for r in res.json()["recipes"]]
        assert names == ["Butter Chicken"]

    def test_tags_any(self, client):
        res = client.get("/recipes/search", params={"tags": "vegan,spicy"})
        names = sorted(r["name"] for r in res.json()["recipes"])
        assert names == ["Butter Chicken", "Chicken Stir Fry", "Tofu Green Curry"]

    def test_name_substring(self, client):
        res = client.get("/recipes/search", params={"name": "curry"})
        assert [r["name"] for r in res.json()["recipes"]] == ["Tofu Green Curry"]

    def test_summary_projection_and_string_ids(self, client):
        recipe = client.get("/recipes/search", params={"name": "Butter"}).json()["recipes"][0]
        assert set(recipe) == {"_id", "name", "cuisine", "tags", "prepTime"}
        assert ObjectId.is_valid(recipe["_id"])
        assert recipe["cuisine"]["name"] == "Indian"
        assert ObjectId.is_valid(recipe["cuisine"]["_id"])

    def test_blank_params_do_not_filter(self, client):
        res = client.get("/recipes/search", params={"name": "", "tags": ",", "ingredients": " "})
        assert len(res.json()["recipes"]) == 5


class TestDetail:
    """Tests for GET /recipes/detail."""

    def test_found(self, client, app_store):
        rid = _recipe_id(app_store, "Garlic Chicken")
        res = client.get("/recipes/detail", params={"id": rid})
        assert res.status_code == 200
        recipe = res.json()["recipe"]
        assert recipe["_id"] == rid
        assert [i["name"] for i in recipe["ingredients"]] == ["chicken breast", "garlic", "salt"]

    def test_not_found(self, client):
        res = client.get("/recipes/detail", params={"id": str(ObjectId())})
        assert res.status_code == 404
        assert res.json()["detail"]["error"] == "NotFound"

    def test_invalid_id(self, client):
        res = client.get("/recipes/detail", params={"id": "not-an-id"})
        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "InvalidIdentifier"


class TestCreate:
    """Tests for POST /recipes/create."""

    def test_created_with_generated_id(self, client):
        res = client.post("/recipes/create", json=TOM_YUM)
        assert res.status_code == 201
        body = res.json()
        assert body["message"] == "Recipe created"
        assert ObjectId.is_valid(body["recipeId"])

    def test_round_trip_returns_snapshots(self, client, app_store):
        rid = client.post("/recipes/create", json=dict(TOM_YUM, tags=["spicy", "quick"])).json()["recipeId"]
        recipe = client.get("/recipes/detail", params={"id": rid}).json()["recipe"]

        thai = asyncio.run(app_store.find_one("cuisines", {"name": "Thai"}))
        assert recipe["cuisine"] == {"_id": str(thai["_id"]), "name": "Thai"}
        assert sorted(t["name"] for t in recipe["tags"]) == ["quick", "spicy"]
        assert all(ObjectId.is_valid(t["_id"]) for t in recipe["tags"])

    def test_numeric_quantity_stored_as_text(self, client):
        body = dict(TOM_YUM, ingredients=[{"name": "shrimp", "quantity": 200, "unit": "g"}])
        rid = client.post("/recipes/create", json=body).json()["recipeId"]
        recipe = client.get("/recipes/detail", params={"id": rid}).json()["recipe"]
        assert recipe["ingredients"][0]["quantity"] == "200"

    def test_unknown_cuisine(self, client):
        res = client.post("/recipes/create", json=dict(TOM_YUM, cuisine="Atlantis"))
        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "InvalidCuisine"

    def test_unknown_tag(self, client):
        res = client.post("/recipes/create", json=dict(TOM_YUM, tags=["spicy", "nope"]))
        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "InvalidTags"

    def test_missing_fields(self, client):
        body = {k: v for k, v in TOM_YUM.items() if k not in ("servings", "instructions")}
        res = client.post("/recipes/create", json=body)
        assert res.status_code == 400
        detail = res.json()["detail"]
        assert detail["error"] == "MissingFields"
        assert "servings" in detail["message"] and "instructions" in detail["message"]

    def test_nothing_written_on_failure(self, client):
        client.post("/recipes/create", json=dict(TOM_YUM, cuisine="Atlantis"))
        assert len(client.get("/recipes/search").json()["recipes"]) == 5

    def test_wrong_type_is_framework_validation(self, client):
        res = client.post("/recipes/create", json=dict(TOM_YUM, servings="lots"))
        assert res.status_code == 422


class TestUpdate:
    """Tests for PUT /recipes/update/{id}."""

    def test_updates_and_keeps_reviews(self, client, app_store):
        rid = _recipe_id(app_store, "Chicken Stir Fry")
        client.post(f"/recipes/{rid}/reviews", json={"user": "ann", "rating": 4, "comment": "nice"})

        res = client.put(f"/recipes/update/{rid}", json=TOM_YUM)
        assert res.status_code == 200

        recipe = client.get("/recipes/detail", params={"id": rid}).json()["recipe"]
        assert recipe["name"] == "Tom Yum"
        assert [t["name"] for t in recipe["tags"]] == ["spicy"]
        assert len(recipe["reviews"]) == 1

    def test_not_found(self, client):
        res = client.put(f"/recipes/update/{ObjectId()}", json=TOM_YUM)
        assert res.status_code == 404

    def test_invalid_id(self, client):
        res = client.put("/recipes/update/123", json=TOM_YUM)
        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "InvalidIdentifier"

    def test_validation_failure(self, client, app_store):
        rid = _recipe_id(app_store, "Chicken Stir Fry")
        res = client.put(f"/recipes/update/{rid}", json=dict(TOM_YUM, tags=["nope"]))
        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "InvalidTags"


class TestDelete:
    """Tests for DELETE /recipes/delete/{id}."""

    def test_deleted_then_gone(self, client, app_store):
        rid = _recipe_id(app_store, "Yogurt Dip")
        assert client.delete(f"/recipes/delete/{rid}").json() == {"message": "Deleted successfully"}
        assert client.delete(f"/recipes/delete/{rid}").status_code == 404
        assert client.get("/recipes/detail", params={"id": rid}).status_code == 404

    def test_invalid_id(self, client):
        assert client.delete("/recipes/delete/xyz").status_code == 400


class TestReviews:
    """Tests for POST /recipes/{id}/reviews."""

    def test_reviews_append_in_order(self, client, app_store):
        rid = _recipe_id(app_store, "Butter Chicken")
        first = client.post(f"/recipes/{rid}/reviews", json={"user": "ann", "rating": 5, "comment": "great"})
        second = client.post(f"/recipes/{rid}/reviews", json={"user": "bo", "rating": "3", "comment": "ok"})
        assert first.status_code == second.status_code == 201
        assert ObjectId.is_valid(first.json()["reviewId"])

        reviews = client.get("/recipes/detail", params={"id": rid}).json()["recipe"]["reviews"]
        assert [(r["user"], r["rating"]) for r in reviews] == [("ann", 5), ("bo", 3)]
        assert reviews[0]["id"] == first.json()["reviewId"]
        assert "timestamp" in reviews[0]

    def test_missing_fields(self, client, app_store):
        rid = _recipe_id(app_store, "Butter Chicken")
        res = client.post(f"/recipes/{rid}/reviews", json={"user": "ann"})
        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "MissingFields"

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, client, app_store, rating):
        rid = _recipe_id(app_store, "Butter Chicken")
        res = client.post(f"/recipes/{rid}/reviews", json={"user": "ann", "rating": rating, "comment": "x"})
        assert res.status_code == 422

    def test_unknown_recipe(self, client):
        res = client.post(f"/recipes/{ObjectId()}/reviews", json={"user": "a", "rating": 4, "comment": "x"})
        assert res.status_code == 404
