"""Tests for authentication, users, companies and media endpoints."""

import logging

import pytest

from agixt import APIError, AuthError, Company, User

from conftest import sent_json

OTP_URI = "otpauth://totp/AGiXT:a@b.c?secret=ABCDEF&issuer=AGiXT"


class TestLogin:
    """Test token installation from login responses."""

    async def test_token_field(self, api, client):
        login = api.post("/v1/login").respond(200, json={"token": "Bearer session"})
        agents = api.get("/v1/agent").respond(200, json={"agents": []})
        assert await client.login("a@b.c", "123456") == "session"
        assert sent_json(login) == {"email": "a@b.c", "token": "123456"}
        await client.get_agents()
        assert agents.calls.last.request.headers["Authorization"] == "session"

    async def test_magic_link(self, api, client, caplog):
        """The token in a verification link is used for later calls."""
        api.post("/v1/login").respond(
            200, json={"detail": "https://x.test/?email=a@b.c&token=abc123"}
        )
        agents = api.get("/v1/agent").respond(200, json={"agents": []})
        caplog.set_level(logging.INFO, logger="agixt")
        assert await client.login("a@b.c", "123456") == "abc123"
        assert client.authorization == "abc123"
        assert "Log in at https://x.test/" in caplog.text
        await client.get_agents()
        assert agents.calls.last.request.headers["Authorization"] == "abc123"

    async def test_magic_link_exact_parameter(self, api, client):
        """Only a parameter named exactly ``token`` is read."""
        api.post("/v1/login").respond(
            200, json={"detail": "https://x.test/?reset_token=zzz&token=abc"}
        )
        assert await client.login("a@b.c", "1") == "abc"

    async def test_no_token(self, api, client):
        api.post("/v1/login").respond(200, json={"detail": "Check your email"})
        assert await client.login("a@b.c", "1") is None
        assert client.authorization == "test-token"

    async def test_rejected(self, api, client):
        api.post("/v1/login").respond(401, text='{"detail":"Invalid OTP"}')
        with pytest.raises(APIError) as exc:
            await client.login("a@b.c", "bad")
        assert exc.value.status == 401
        assert client.authorization == "test-token"

    async def test_logout(self, client):
        await client.logout()
        assert client.authorization is None


class TestRegister:
    """Test registration and the follow-up login."""

    async def test_register_logs_in_with_secret(self, api, client):
        register = api.post("/v1/user").respond(200, json={"otp_uri": OTP_URI})
        login = api.post("/v1/login").respond(200, json={"token": "fresh"})
        assert await client.register_user("a@b.c", "Ada", "Lovelace") == OTP_URI
        assert sent_json(register) == {
            "email": "a@b.c",
            "first_name": "Ada",
            "last_name": "Lovelace",
        }
        assert sent_json(login) == {"email": "a@b.c", "token": "ABCDEF"}
        assert client.authorization == "fresh"

    async def test_otp_uri_without_secret(self, api, client):
        api.post("/v1/user").respond(
            200, json={"otp_uri": "otpauth://totp/AGiXT:a@b.c?issuer=AGiXT"}
        )
        login = api.post("/v1/login").respond(200, json={"token": "x"})
        with pytest.raises(AuthError):
            await client.register_user("a@b.c", "Ada", "Lovelace")
        assert not login.called

    async def test_no_otp_uri_returns_body(self, api, client):
        api.post("/v1/user").respond(200, text='{"message":"User exists"}')
        login = api.post("/v1/login").respond(200, json={"token": "x"})
        assert await client.register_user("a@b.c", "A", "L") == '{"message":"User exists"}'
        assert not login.called

    async def test_register_failure(self, api, client):
        api.post("/v1/user").respond(409, text="duplicate")
        with pytest.raises(APIError) as exc:
            await client.register_user("a@b.c", "A", "L")
        assert exc.value.message == "duplicate"


class TestUsers:

    async def test_user_exists(self, api, client):
        route = api.get("/v1/user/exists").respond(200, json=True)
        assert await client.user_exists("a@b.c") is True
        assert route.calls.last.request.url.params["email"] == "a@b.c"

    async def test_user_exists_non_bool(self, api, client):
        api.get("/v1/user/exists").respond(200, json={"exists": True})
        assert await client.user_exists("a@b.c") is False

    async def test_get_user(self, api, client):
        api.get("/v1/user").respond(
            200, json={"id": "u1", "email": "a@b.c", "first_name": "Ada"}
        )
        assert await client.get_user() == User(id="u1", email="a@b.c", first_name="Ada")

    async def test_update_user(self, api, client):
        route = api.put("/v1/user").respond(200, json={"message": "updated"})
        assert await client.update_user(first_name="Grace") == {"message": "updated"}
        assert sent_json(route) == {"first_name": "Grace"}


class TestCompanies:

    async def test_get_companies(self, api, client):
        api.get("/v1/companies").respond(200, json=[
            {"id": "co1", "name": "Acme", "agents": [{"id": "a1", "name": "XT"}]},
        ])
        [company] = await client.get_companies()
        assert isinstance(company, Company)
        assert company.agents[0].name == "XT"

    async def test_get_company(self, api, client):
        api.get("/v1/company/co1").respond(200, json={"id": "co1", "name": "Acme"})
        assert await client.get_company("co1") == {"id": "co1", "name": "Acme"}

    async def test_invitations(self, api, client):
        create = api.post("/v1/invitation").respond(200, json={"id": "inv1"})
        api.delete("/v1/invitation/inv1").respond(200, json={"message": "revoked"})
        assert await client.create_invitation("b@c.d") == {"id": "inv1"}
        assert sent_json(create) == {"email": "b@c.d", "role": "user"}
        assert await client.delete_invitation("inv1") == "revoked"

    async def test_oauth_providers(self, api, client):
        api.get("/v1/oauth").respond(200, json={"providers": [{"name": "github"}]})
        assert await client.get_oauth_providers() == [{"name": "github"}]


class TestMedia:

    async def test_text_to_speech_bytes(self, api, client):
        audio = b"RIFF\x00\x01\x02binary"
        route = api.post("/v1/audio/speech").respond(
            200, content=audio, headers={"Content-Type": "audio/wav"}
        )
        assert await client.text_to_speech("hello") == audio
        assert sent_json(route) == {"input": "hello", "voice": "default"}

    async def test_text_to_speech_failure(self, api, client):
        api.post("/v1/audio/speech").respond(500, text="no tts provider")
        with pytest.raises(APIError) as exc:
            await client.text_to_speech("hello")
        assert exc.value.message == "no tts provider"

    async def test_generate_image(self, api, client):
        route = api.post("/v1/images/generations").respond(
            200, json={"data": [{"url": "https://img.test/1.png"}]}
        )
        result = await client.generate_image("a cat", n=2)
        assert result["data"][0]["url"] == "https://img.test/1.png"
        assert sent_json(route) == {"prompt": "a cat", "n": 2}
