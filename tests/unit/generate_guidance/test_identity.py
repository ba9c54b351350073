"""Tests for generate_guidance.identity module."""

import asyncio
import json

import httpx
import pytest

from generate_guidance.identity import IdentityVerifier, bearer_token


class TestBearerToken:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer   abc ", "abc"),
            ("Basic abc", None),
            ("Bearer ", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parsing(self, header, expected) -> None:
        assert bearer_token(header) == expected


class TestIdentityVerifier:
    def test_returns_local_id(self, mock_client) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.url.params["key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"users": [{"localId": "uid-123"}]})

        verifier = IdentityVerifier(mock_client(handler), "web-key")

        assert asyncio.run(verifier.verify("token-1")) == "uid-123"
        assert seen == {"key": "web-key", "body": {"idToken": "token-1"}}

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(400, json={"error": {"message": "INVALID_ID_TOKEN"}}),
            httpx.Response(200, json={"users": []}),
            httpx.Response(200, json={"users": [{"email": "a@b.c"}]}),
            httpx.Response(200, content=b"<html>"),
        ],
    )
    def test_rejections(self, mock_client, response) -> None:
        verifier = IdentityVerifier(mock_client(lambda r: response), "web-key")
        assert asyncio.run(verifier.verify("t")) is None

    def test_missing_api_key_rejects_without_call(self, mock_client) -> None:
        calls = []
        verifier = IdentityVerifier(mock_client(lambda r: calls.append(r) or httpx.Response(200)), None)
        assert asyncio.run(verifier.verify("t")) is None
        assert calls == []
