"""Integration tests for the Intents API."""

from datetime import timedelta

import pytest

from tests.conftest import FakeClock


class TestMyIntent:
    """Tests for declaring and reading the caller's intent."""

    @pytest.mark.asyncio
    async def test_intent_is_null_before_declaring(self, seed_profile, client_for, city):
        me = await seed_profile(city)

        response = await client_for(me).get("/api/v1/me/intent")

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_set_intent_then_read_back(self, seed_profile, client_for, city):
        me = await seed_profile(city)
        client = client_for(me)

        response = await client.post("/api/v1/me/intent", json={"intent": "DRINKS"})

        assert response.status_code == 200
        data = response.json()
        assert data["userId"] == str(me)
        assert data["intent"] == "DRINKS"
        assert "updatedAt" in data

        read = await client.get("/api/v1/me/intent")
        assert read.json()["intent"] == "DRINKS"

    @pytest.mark.asyncio
    async def test_latest_intent_wins(self, seed_profile, client_for, city):
        me = await seed_profile(city)
        client = client_for(me)

        await client.post("/api/v1/me/intent", json={"intent": "DRINKS"})
        await client.post("/api/v1/me/intent", json={"intent": "DATE"})

        read = await client.get("/api/v1/me/intent")
        assert read.json()["intent"] == "DATE"

    @pytest.mark.asyncio
    async def test_rejects_unknown_intent(self, seed_profile, client_for, city):
        me = await seed_profile(city)

        response = await client_for(me).post("/api/v1/me/intent", json={"intent": "PARTY"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestNearby:
    """Tests for finding nearby users with the same intent."""

    @pytest.mark.asyncio
    async def test_finds_user_with_same_fresh_intent(self, seed_profile, client_for, city):
        alice = await seed_profile(city, display_name="Alice")
        bob = await seed_profile(city, display_name="Bob")
        await client_for(alice).post("/api/v1/me/intent", json={"intent": "DRINKS"})
        await client_for(bob).post("/api/v1/me/intent", json={"intent": "DRINKS"})

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.status_code == 200
        data = response.json()
        assert [m["profile"]["id"] for m in data] == [str(bob)]
        assert data[0]["profile"]["displayName"] == "Bob"
        assert data[0]["intent"]["intent"] == "DRINKS"

    @pytest.mark.asyncio
    async def test_stale_intent_is_not_returned(
        self, seed_profile, client_for, city, clock: FakeClock
    ):
        alice = await seed_profile(city)
        bob = await seed_profile(city)
        await client_for(bob).post("/api/v1/me/intent", json={"intent": "DRINKS"})

        clock.advance(timedelta(hours=5))
        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_intent_within_window_is_returned(
        self, seed_profile, client_for, city, clock: FakeClock
    ):
        alice = await seed_profile(city)
        bob = await seed_profile(city)
        await client_for(bob).post("/api/v1/me/intent", json={"intent": "JUST_CHAT"})

        clock.advance(timedelta(hours=3, minutes=59))
        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "JUST_CHAT"}
        )

        assert [m["profile"]["id"] for m in response.json()] == [str(bob)]

    @pytest.mark.asyncio
    async def test_intent_exactly_at_cutoff_is_returned(
        self, seed_profile, client_for, city, clock: FakeClock
    ):
        alice = await seed_profile(city)
        bob = await seed_profile(city)
        await client_for(bob).post("/api/v1/me/intent", json={"intent": "DRINKS"})

        clock.advance(timedelta(hours=4))
        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert [m["profile"]["id"] for m in response.json()] == [str(bob)]

    @pytest.mark.asyncio
    async def test_other_intent_is_not_returned(self, seed_profile, client_for, city):
        alice = await seed_profile(city)
        await seed_profile(city, intent="DATE")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_other_country_is_not_returned(self, seed_profile, client_for, city):
        alice = await seed_profile(city, country="UK")
        await seed_profile(city, country="CA", intent="DRINKS")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_city_match_is_case_sensitive(self, seed_profile, client_for, city):
        alice = await seed_profile(city)
        await seed_profile(city.upper(), intent="DRINKS")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_user_who_switched_to_none_is_hidden(self, seed_profile, client_for, city):
        alice = await seed_profile(city)
        bob = await seed_profile(city)
        bob_client = client_for(bob)
        await bob_client.post("/api/v1/me/intent", json={"intent": "DRINKS"})
        await bob_client.post("/api/v1/me/intent", json={"intent": "NONE"})

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_requester_without_locality_gets_empty_list(
        self, seed_profile, client_for, city
    ):
        alice = await seed_profile(None, country=None)
        await seed_profile(city, intent="DRINKS")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_requester_is_never_returned(self, seed_profile, client_for, city):
        alice = await seed_profile(city, intent="DRINKS")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_results_capped_by_free_tier(self, seed_profile, client_for, city):
        alice = await seed_profile(city)
        for i in range(12):
            await seed_profile(city, display_name=f"User {i}", intent="DRINKS")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "DRINKS"}
        )

        data = response.json()
        assert len(data) == 10
        assert len({m["profile"]["id"] for m in data}) == 10

    @pytest.mark.asyncio
    async def test_missing_intent_returns_empty_list(self, seed_profile, client_for, city):
        alice = await seed_profile(city)
        await seed_profile(city, intent="DRINKS")

        response = await client_for(alice).get("/api/v1/intents/nearby")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_none_intent_returns_empty_list(self, seed_profile, client_for, city):
        alice = await seed_profile(city)
        await seed_profile(city, intent="NONE")

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "NONE"}
        )

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_invalid_intent_is_rejected(self, seed_profile, client_for, city):
        alice = await seed_profile(city)

        response = await client_for(alice).get(
            "/api/v1/intents/nearby", params={"intent": "PARTY"}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/api/v1/intents/nearby", params={"intent": "DRINKS"})

        assert response.status_code == 401
