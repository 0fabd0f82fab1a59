"""
HTTP tests for the Flask statement endpoints.
"""

import json

import pytest

from sqlforge.app import app
from sqlforge.config import BUILDER_CONFIG


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestStatementRoutes:
    """Tests for /query/<kind>."""

    def test_select(self, client):
        """Statements come back with positional params."""
        resp = client.post("/query/select", json={"table": "users", "fields": ["id"], "condition": "age > 18"})
        assert resp.status_code == 200
        assert resp.get_json() == {"sql": "select id from users where age > $1", "params": [18]}

    def test_select_with_dialect(self, client):
        """A dialect in the payload adapts the placeholders."""
        resp = client.post("/query/select", json={"table": "users", "condition": "id = 3", "dialect": "postgres"})
        assert resp.get_json() == {"sql": "select * from users where id = %(p1)s", "params": {"p1": 3}}

    def test_configured_dialect(self, client, monkeypatch):
        """The configured dialect applies when the payload has none."""
        monkeypatch.setitem(BUILDER_CONFIG, "dialect", "sqlite")
        resp = client.post("/query/delete", json={"table": "users", "condition": "id = 3"})
        assert resp.get_json() == {"sql": "delete from users where id = ?", "params": [3]}

    def test_insert(self, client):
        """Insert columns follow the order of insertValues in the request body."""
        body = json.dumps({"table": "users", "insertValues": {"name": "A", "age": 4}})
        resp = client.post("/query/insert", data=body, content_type="application/json")
        assert resp.get_json() == {"sql": "insert into users (name, age) values ($1, $2)", "params": ["A", 4]}

    def test_default_dialect_in_payload(self, client, monkeypatch):
        """Naming the default dialect matches the unadapted output."""
        monkeypatch.setitem(BUILDER_CONFIG, "dialect", "default")
        implicit = client.post("/query/select", json={"table": "users", "condition": "id = 3"}).get_json()
        explicit = client.post("/query/select", json={"table": "users", "condition": "id = 3", "dialect": "default"})
        assert explicit.get_json() == implicit == {"sql": "select * from users where id = $1", "params": [3]}

    def test_list_condition(self, client):
        """[field, operator, value] arrays are accepted as conditions."""
        resp = client.post("/query/select", json={"table": "users", "condition": [["age", ">", 18, "or"], ["id", "=", 2]]})
        assert resp.status_code == 200
        assert resp.get_json() == {"sql": "select * from users where age > $1 and id = $2", "params": [18, 2]}

    def test_update(self, client):
        """Update numbering continues into WHERE."""
        resp = client.post("/query/update", json={
            "table": "users", "updateValues": {"name": "B"}, "condition": ["id = 1"],
        })
        assert resp.get_json() == {"sql": "update users set name = $1 where id = $2", "params": ["B", 1]}

    def test_missing_table(self, client):
        """A payload without a table is a client error."""
        resp = client.post("/query/select", json={"fields": ["id"]})
        assert resp.status_code == 400
        assert "table" in resp.get_json()["error"]

    def test_non_json_body(self, client):
        """Non-object bodies are rejected."""
        resp = client.post("/query/select", data="not json", content_type="text/plain")
        assert resp.status_code == 400

    def test_strict_reports_issues(self, client):
        """Strict builds return the issue names."""
        resp = client.post("/query/select", json={"table": "users; DROP TABLE x", "strict": True})
        assert resp.status_code == 400
        assert resp.get_json()["issues"] == ["SANITIZED_IDENTIFIER"]

    def test_unknown_route(self, client):
        """Unknown routes keep their 404."""
        assert client.post("/query/merge", json={}).status_code == 404

    def test_wrong_method(self, client):
        """GET is not allowed on statement routes."""
        assert client.get("/query/select").status_code == 405


class TestMalformedPayloads:
    """Wrongly typed JSON values are client errors, not server errors."""

    @pytest.mark.parametrize("route, body", [
        ("/query/insert", {"table": "users", "insertValues": [1, 2]}),
        ("/query/update", {"table": "users", "updateValues": "name = 1"}),
        ("/query/select", {"table": "users", "condition": [{"field": "a", "operator": None, "value": 1}]}),
        ("/query/select", {"table": "users", "condition": [{"field": 7, "operator": "=", "value": 1}]}),
        ("/query/select", {"table": "users", "condition": [["age", ">"]]}),
        ("/query/select", {"table": "users", "condition": [42]}),
        ("/query/select", {"table": ["users"]}),
        ("/query/select", {"table": "users", "fields": [1, 2]}),
        ("/query/select", {"table": "users", "orderby": {"name": "asc"}}),
        ("/query/select", {"table": "users", "limit": [10]}),
        ("/query/select", {"table": "users", "joins": [{"table": "a", "on": 5}]}),
        ("/query/select", {"table": "users", "joins": ["accounts"]}),
        ("/query/select", {"table": "users", "dialect": 3}),
        ("/query/dataframe", {"table": "users", "columns": None, "data": [{"id": 1}]}),
        ("/query/dataframe", {"table": "users", "columns": ["id"], "data": "id=1"}),
    ])
    def test_rejected_with_400(self, client, route, body):
        """Each malformed body gets a 400 with an error message."""
        resp = client.post(route, json=body)
        assert resp.status_code == 400
        assert resp.get_json()["error"]


class TestValidateRoute:
    """Tests for /query/validate."""

    def test_where_on_insert(self, client):
        """Insert payloads with conditions are flagged."""
        resp = client.post("/query/validate", json={
            "table": "users", "kind": "insert", "insertValues": {"a": 1}, "condition": "id = 1",
        })
        assert resp.status_code == 200
        assert resp.get_json() == {"issues": ["WHERE_ON_INSERT"]}

    def test_clean_payload(self, client):
        """A valid payload has no issues."""
        resp = client.post("/query/validate", json={"table": "users", "kind": "select"})
        assert resp.get_json() == {"issues": []}

    def test_invalid_kind(self, client):
        """Unknown kinds are rejected."""
        resp = client.post("/query/validate", json={"table": "users", "kind": "merge"})
        assert resp.status_code == 400


class TestDataframeRoute:
    """Tests for /query/dataframe."""

    def test_rows(self, client):
        """Each row gives its list of statements."""
        resp = client.post("/query/dataframe", json={
            "table": "users",
            "columns": ["id", "name"],
            "key_columns": ["id"],
            "ops": ["update", "delete"],
            "data": [{"id": 1, "name": "a"}],
        })
        assert resp.status_code == 200
        assert resp.get_json() == [[
            {"sql": "update users set name = $1 where id = $2", "params": ["a", 1]},
            {"sql": "delete from users where id = $1", "params": [1]},
        ]]

    def test_missing_columns(self, client):
        """data, table and columns are required."""
        resp = client.post("/query/dataframe", json={"table": "users", "data": []})
        assert resp.status_code == 400
