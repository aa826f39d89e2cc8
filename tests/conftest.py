"""
Shared pytest fixtures for the DeviantArt browse client tests.

Provides fixtures for:
- Mock aiohttp responses and sessions
- An AuthenticatedFetch wired to a mock session with a no-op sleep
- Sample API payloads (deviations, envelopes, errors)
- Logging capture
"""

import json
import logging
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from deviantart_api.transport.fetch import ApiSession, AuthenticatedFetch


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def configure_test_logging(caplog):
    """Configure logging for all tests."""
    caplog.set_level(logging.DEBUG)
    return caplog


# ============================================================================
# aiohttp Doubles
# ============================================================================

def make_response(
    status: int = 200,
    body: Any = None,
    text: Optional[str] = None,
    raw: Optional[bytes] = None,
) -> MagicMock:
    """
    Build a mock aiohttp response usable as an async context manager.

    body is JSON-encoded unless text (or raw bytes) is given verbatim.
    """
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.headers = {}
    payload = text if text is not None else json.dumps(body if body is not None else {})
    if raw is None:
        raw = payload.encode("utf-8")
    mock_response.read = AsyncMock(return_value=raw)
    mock_response.text = AsyncMock(return_value=payload)
    mock_response.json = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)
    return mock_response


def make_session(responses: List[MagicMock]) -> MagicMock:
    """Mock aiohttp session whose get() and post() yield responses in order."""
    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.get = MagicMock(side_effect=list(responses))
    mock_session.post = MagicMock(side_effect=list(responses))
    mock_session.close = AsyncMock()
    return mock_session


def sent_params(mock_session: MagicMock, call: int = -1) -> Dict[str, str]:
    """Query parameters of one recorded GET."""
    return mock_session.get.call_args_list[call].kwargs["params"]


@pytest.fixture
def refresher():
    """Credential refresher that hands back the session with a new token."""
    async def refresh(api_session: ApiSession) -> ApiSession:
        refresh.count += 1
        api_session.access_token = f"token-{refresh.count}"
        return api_session

    refresh.count = 0
    return AsyncMock(side_effect=refresh)


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def make_fetcher(refresher, sleep):
    """Factory for a fetcher bound to a mock session serving responses."""
    def factory(*responses: MagicMock) -> AuthenticatedFetch:
        fetcher = AuthenticatedFetch(
            ApiSession(access_token="token-0"),
            refresher,
            sleep=sleep,
        )
        fetcher._session = make_session(list(responses))
        return fetcher
    return factory


# ============================================================================
# Sample Payloads
# ============================================================================

@pytest.fixture
def user_data() -> Dict[str, Any]:
    return {
        "userid": "09A4052F-0000-0000-0000-000000000000",
        "username": "artist",
        "usericon": "https://a.deviantart.net/avatars/a/r/artist.png",
    }


@pytest.fixture
def deviation_data(user_data) -> Dict[str, Any]:
    return make_deviation("DEV-1", user_data)


def make_deviation(deviation_id: str, author: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "deviationid": deviation_id,
        "is_deleted": False,
        "is_published": True,
        "title": f"Deviation {deviation_id}",
        "category": "Landscapes",
        "author": author,
        "preview": {
            "src": "https://images.example/preview.jpg",
            "width": 400,
            "height": 300,
            "transparency": False,
        },
        "content": {
            "src": "https://images.example/full.jpg",
            "width": 1600,
            "height": 1200,
            "transparency": False,
            "filesize": 524288,
        },
        "thumbs": [
            {"src": "https://images.example/t150.jpg", "width": 150, "height": 113, "transparency": False},
        ],
    }


def browse_envelope(
    results: List[Dict[str, Any]],
    has_more: bool = True,
    next_offset: Optional[int] = 10,
) -> Dict[str, Any]:
    return {"has_more": has_more, "next_offset": next_offset, "results": results}


@pytest.fixture
def error_body() -> Dict[str, Any]:
    return {
        "error": "invalid_request",
        "error_description": "Request field validation failed.",
        "error_details": {"tag": "tag is required"},
        "error_code": 0,
    }
