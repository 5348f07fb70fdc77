"""POST /track-result end to end."""

from __future__ import annotations

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from oracle.auth.jwt import create_access_token


class TestAuthentication:
    async def test_missing_header_is_401_before_database(self, bare_client: AsyncClient):
        response = await bare_client.post("/track-result", json={"type": "DIVINE", "word": "うんこ", "score": 1})
        assert response.status_code == 401
        assert response.json() == {"error": "Missing authorization header"}

    async def test_missing_header_wins_over_bad_body(self, bare_client: AsyncClient):
        response = await bare_client.post("/track-result", content=b"not json")
        assert response.status_code == 401

    async def test_invalid_token_is_401(self, bare_client: AsyncClient):
        response = await bare_client.post(
            "/track-result",
            json={"type": "DIVINE", "word": "うんこ"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.parametrize("header", ["garbage-token", "Bearer", "Basic dXNlcjpwYXNz"])
    async def test_non_bearer_header_is_rejected_not_missing(self, bare_client: AsyncClient, header: str):
        response = await bare_client.post(
            "/track-result",
            json={"type": "DIVINE", "word": "うんこ"},
            headers={"Authorization": header},
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    async def test_expired_token_is_401(self, bare_client: AsyncClient, user_id: str):
        token = create_access_token(user_id, expires_in=timedelta(minutes=-5))
        response = await bare_client.post(
            "/track-result",
            json={"type": "DIVINE", "word": "うんこ"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 401

    async def test_missing_secret_is_500(self, bare_client: AsyncClient, auth_headers, monkeypatch):
        from oracle.config import get_settings

        monkeypatch.setenv("ORACLE_JWT_SECRET", "")
        get_settings.cache_clear()

        response = await bare_client.post("/track-result", json={"type": "DIVINE", "word": "うんこ"}, headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"error": "Server configuration error"}


class TestValidation:
    @pytest.mark.parametrize(
        "body",
        [
            {"word": "うんこ", "score": 10},
            {"type": "DIVINE", "score": 10},
            {"type": "", "word": "うんこ"},
            {"type": "DIVINE", "word": ""},
        ],
    )
    async def test_missing_fields_is_400(self, authed_client: AsyncClient, body):
        response = await authed_client.post("/track-result", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    async def test_unknown_type_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json={"type": "LEGENDARY", "word": "うんこ"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    @pytest.mark.parametrize("score", [2**31, 2**70, -(2**31) - 1])
    async def test_out_of_range_score_is_400(self, authed_client: AsyncClient, score: int):
        response = await authed_client.post("/track-result", json={"type": "DIVINE", "word": "うんこ", "score": score})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["total_spins"] == 0
        assert profile["collections"]["total"] == 0

    async def test_score_at_integer_limit_is_recorded(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json={"type": "DIVINE", "word": "うんこ", "score": 2**31 - 1})
        assert response.status_code == 200

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["highest_score"] == 2**31 - 1

    async def test_malformed_json_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post(
            "/track-result", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    async def test_non_object_body_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json=["DIVINE", "うんこ"])
        assert response.status_code == 400


class TestRecording:
    async def test_divine_spin_succeeds(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json={"type": "DIVINE", "word": "うんこ", "score": 87})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Oracle result tracked successfully"}

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["total_spins"] == 1
        assert profile["stats"]["total_points"] == 20
        assert profile["stats"]["divine_count"] == 1
        assert profile["stats"]["reality_count"] == 0
        assert profile["stats"]["highest_score"] == 87
        assert profile["collections"]["items"][0]["found_count"] == 1
        assert profile["collections"]["items"][0]["divine_words"]["word"] == "うんこ"

    async def test_unknown_word_is_404_and_statistics_untouched(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json={"type": "DIVINE", "word": "存在しない", "score": 50})
        assert response.status_code == 404
        assert response.json() == {"error": "Divine word not found"}

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["total_spins"] == 0

    async def test_void_with_unknown_word_is_200(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json={"type": "VOID", "word": "存在しない", "score": 2})
        assert response.status_code == 200

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["total_spins"] == 1
        assert profile["stats"]["total_points"] == 1
        assert profile["collections"]["total"] == 0

    async def test_score_defaults_to_zero(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-result", json={"type": "REALITY", "word": "りんご"})
        assert response.status_code == 200

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["highest_score"] == 0
        assert profile["stats"]["total_points"] == 5

    async def test_legacy_path_alias(self, authed_client: AsyncClient):
        response = await authed_client.post("/track-oracle-result", json={"type": "REALITY", "word": "りんご"})
        assert response.status_code == 200

    async def test_failed_write_is_500_and_records_nothing(self, authed_client: AsyncClient, monkeypatch):
        async def broken_record_spin(*args, **kwargs):
            raise OperationalError("UPDATE user_statistics", {}, Exception("disk I/O error"))

        monkeypatch.setattr("oracle.collections.recorder.record_spin", broken_record_spin)

        response = await authed_client.post("/track-result", json={"type": "DIVINE", "word": "うんこ", "score": 87})
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "*"

        profile = (await authed_client.get("/profile")).json()
        assert profile["stats"]["total_spins"] == 0
        assert profile["collections"]["items"] == []
