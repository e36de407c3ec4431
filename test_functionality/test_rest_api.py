"""REST adapter: auth, the protected recommend endpoint and error mapping."""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from factory import ServiceFactory
from domain.exceptions import (
    DomainError,
    MalformedJsonError,
    RepositoryError,
)
from infrastructure.persistence.user_repo import SQLiteUserRepository
from adapters.rest.app import create_app
from adapters.rest.routers.recommendations import to_http_exception

PROFILE = {
    "symptoms": '["insomnia"]',
    "gender": 1,
    "age": 45,
    "bloodPressure": 1,
    "bloodSugar": 0,
    "diseases": "[]",
}


def _client_for(settings, llm) -> TestClient:
    f = ServiceFactory(settings, llm_gateway=llm)
    asyncio.run(f.initialize())
    return TestClient(create_app(f))


def _login(client) -> dict:
    client.post("/user/register", json={"nickname": "alice", "password": "pw123456"})
    response = client.post("/user/login", json={"nickname": "alice", "password": "pw123456"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_health(factory):
    with TestClient(create_app(factory)) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_register_duplicate_and_bad_login(factory):
    with TestClient(create_app(factory)) as client:
        first = client.post("/user/register", json={"nickname": "alice", "password": "pw123456"})
        assert first.status_code == 201
        assert first.json()["nickname"] == "alice"

        again = client.post("/user/register", json={"nickname": "alice", "password": "other123"})
        assert again.status_code == 409

        bad = client.post("/user/login", json={"nickname": "alice", "password": "wrong-pw"})
        assert bad.status_code == 401


def test_recommend_returns_saved_recipe(factory, count_rows):
    with TestClient(create_app(factory)) as client:
        headers = _login(client)
        response = client.post("/api/medicinal-diet/recommend", json=PROFILE, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "X"
    assert body["ingredients"] == "a"
    assert body["method"] == "s1\ns2"
    assert body["effect"] == "r"
    assert body["type"] == 0
    assert body["isValid"] == 1
    assert body["createTime"]
    assert body["id"] is not None
    assert count_rows("recipes") == 1


def test_recommend_accepts_plain_arrays(factory, stub_llm):
    payload = dict(PROFILE, symptoms=["insomnia", "fatigue"], diseases=["gout"])
    with TestClient(create_app(factory)) as client:
        headers = _login(client)
        response = client.post("/api/medicinal-diet/recommend", json=payload, headers=headers)
    assert response.status_code == 200
    prompt = stub_llm.calls[0][0][0].content
    assert "insomnia, fatigue" in prompt
    assert "gout" in prompt


def test_recommend_requires_token(factory):
    with TestClient(create_app(factory)) as client:
        response = client.post("/api/medicinal-diet/recommend", json=PROFILE)
    assert response.status_code in (401, 403)


def test_recommend_rejects_bad_token(factory):
    with TestClient(create_app(factory)) as client:
        response = client.post(
            "/api/medicinal-diet/recommend", json=PROFILE,
            headers={"Authorization": "Bearer not-a-jwt"},
        )
    assert response.status_code == 401


def test_rate_limited_upstream_maps_to_502(settings, rate_limited_llm, count_rows):
    with _client_for(settings, rate_limited_llm) as client:
        headers = _login(client)
        response = client.post("/api/medicinal-diet/recommend", json=PROFILE, headers=headers)

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["code"] == "llm_gateway_error"
    assert detail["upstream_status"] == 429
    assert count_rows("health_profiles") == 0


def test_incomplete_reply_names_field(settings, make_llm):
    reply = json.dumps({"name": "X", "ingredients": ["a"], "steps": ["s"]})
    with _client_for(settings, make_llm(reply=reply)) as client:
        headers = _login(client)
        response = client.post("/api/medicinal-diet/recommend", json=PROFILE, headers=headers)

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["code"] == "llm_reply_incomplete"
    assert detail["field"] == "reason"


def test_invalid_age_is_422(factory, stub_llm):
    with TestClient(create_app(factory)) as client:
        headers = _login(client)
        response = client.post(
            "/api/medicinal-diet/recommend", json=dict(PROFILE, age=151), headers=headers,
        )
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_health_profile"
    assert stub_llm.calls == []


def test_out_of_range_blood_pressure_is_rejected_by_schema(factory):
    with TestClient(create_app(factory)) as client:
        headers = _login(client)
        response = client.post(
            "/api/medicinal-diet/recommend", json=dict(PROFILE, bloodPressure=5), headers=headers,
        )
    assert response.status_code == 422


@pytest.mark.parametrize("exc,status,code", [
    (MalformedJsonError("bad json"), 502, "llm_reply_malformed_json"),
    (RepositoryError("disk full"), 500, "persistence_error"),
    (DomainError("boom"), 500, "internal_error"),
])
def test_error_mapping(exc, status, code):
    http_exc = to_http_exception(exc)
    assert http_exc.status_code == status
    assert http_exc.detail["code"] == code


def test_gender_code_beyond_storage_range_is_422(factory, stub_llm, count_rows):
    with TestClient(create_app(factory)) as client:
        headers = _login(client)
        response = client.post(
            "/api/medicinal-diet/recommend", json=dict(PROFILE, gender=10 ** 20), headers=headers,
        )
    assert response.status_code == 422
    assert stub_llm.calls == []
    assert count_rows("health_profiles") == 0


def test_unmapped_gender_code_is_lenient(factory):
    with TestClient(create_app(factory)) as client:
        headers = _login(client)
        response = client.post(
            "/api/medicinal-diet/recommend", json=dict(PROFILE, gender=7), headers=headers,
        )
    assert response.status_code == 200


def test_register_race_is_409(factory, monkeypatch):
    async def _not_found(self, nickname):
        return None

    with TestClient(create_app(factory)) as client:
        client.post("/user/register", json={"nickname": "alice", "password": "pw123456"})
        monkeypatch.setattr(SQLiteUserRepository, "get_by_nickname", _not_found)
        response = client.post("/user/register", json={"nickname": "alice", "password": "pw123456"})
    assert response.status_code == 409


def test_account_store_failure_is_coded_500(factory, monkeypatch):
    async def _broken(self, nickname):
        raise RepositoryError("Database error: disk I/O error")

    monkeypatch.setattr(SQLiteUserRepository, "get_by_nickname", _broken)
    with TestClient(create_app(factory)) as client:
        response = client.post("/user/login", json={"nickname": "alice", "password": "pw123456"})
    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "persistence_error"
