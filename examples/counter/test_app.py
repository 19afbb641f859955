"""Tests for the counter example."""

import json


class TestCounterApp:
    async def test_add_renders_new_total(self, client) -> None:
        response = await client.post("/counter/5")
        assert response.status == 200
        assert json.loads(response.text) == {"total": 5}

        response = await client.post("/counter/2")
        assert json.loads(response.text) == {"total": 7}

    async def test_both_handlers_fold_before_render(self, client) -> None:
        await client.post("/counter/1")
        await client.post("/counter/3")
        response = await client.get("/counter")
        assert json.loads(response.text) == {"total": 4, "history": [1, 3]}

    async def test_bad_amount_is_400(self, client, example_app) -> None:
        response = await client.post("/counter/lots")
        assert response.status == 400
        assert json.loads(response.text) == {"error": "amount must be an integer"}
        assert example_app.state()["total"] == 0

    async def test_each_test_starts_from_zero(self, client) -> None:
        response = await client.get("/counter")
        assert json.loads(response.text) == {"total": 0, "history": []}
