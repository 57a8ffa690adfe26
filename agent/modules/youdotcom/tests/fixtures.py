"""Test fixtures and mock data for You.com module tests."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

from modules.youdotcom.builders import RequestContext

SEARCH_RESPONSE = {
    "results": {
        "web": [
            {
                "url": "https://example.com",
                "title": "Test Title",
                "description": "Test description",
                "snippets": ["snippet 1", "snippet 2"],
                "thumbnail_url": "https://example.com/thumb.jpg",
                "page_age": "2023-01-01T00:00:00",
                "authors": ["Author Name"],
                "favicon_url": "https://example.com/favicon.ico",
            },
            {
                "url": "https://example.org/guide",
                "title": "Second Title",
                "description": "Another description",
                "snippets": [],
            },
        ],
        "news": [
            {
                "title": "News Title",
                "description": "News description",
                "page_age": "2023-01-02T00:00:00",
                "url": "https://news.com/article",
                "thumbnail_url": "https://news.com/thumb.jpg",
            }
        ],
    },
    "metadata": {
        "request_uuid": "test-uuid",
        "query": "test query",
        "latency": 0.1,
    },
}

SEARCH_RESPONSE_EMPTY = {
    "results": {"web": [], "news": []},
    "metadata": {"query": "xyzzy nothing", "latency": 0.05},
}

CONTENTS_RESPONSE = [
    {
        "url": "https://example.com",
        "title": "Example Domain",
        "markdown": "# Example Domain\n\nThis domain is for use in examples.",
        "html": None,
    },
    {
        "url": "https://example.org/docs",
        "title": "Docs",
        "markdown": "Some docs",
    },
]

CONTENTS_RESPONSE_HTML = [
    {
        "url": "https://example.com",
        "title": "Example Domain",
        "html": "<h1>Example Domain</h1>",
    }
]

EXPRESS_RESPONSE = {
    "agent": "express",
    "mode": "express",
    "input": [{"role": "user", "content": "What is the capital of Australia?"}],
    "output": [
        {
            "type": "web_search.results",
            "content": [
                {
                    "source_type": "web_search",
                    "url": "https://en.wikipedia.org/wiki/Canberra",
                    "title": "Canberra - Wikipedia",
                    "snippet": "Canberra is the capital city of Australia.",
                    "thumbnail_url": "https://upload.wikimedia.org/thumb.png",
                },
                {
                    "citation_uri": "https://www.australia.gov.au/canberra",
                    "title": "About Canberra",
                    "snippet": "The national capital.",
                },
            ],
        },
        {
            "type": "message.answer",
            "text": "The capital of Australia is Canberra.",
        },
    ],
}

EXPRESS_RESPONSE_ANSWER_ONLY = {
    "agent": "express",
    "output": [
        {"type": "message.answer", "text": "Paris."},
    ],
}

EXPRESS_RESPONSE_NO_ANSWER = {
    "agent": "express",
    "output": [
        {
            "type": "web_search.results",
            "content": [
                {"url": "https://a.com", "title": "A", "snippet": "a"},
            ],
        }
    ],
}


def make_context(api_key: str = "test-key", user_agent: str = "MCP/1.0.0 (You.com; UNKNOWN)") -> RequestContext:
    return RequestContext(
        api_key=api_key,
        user_agent=user_agent,
        search_url="https://api.ydc-index.io/v1/search",
        contents_url="https://ydc-index.io/v1/contents",
        agents_url="https://api.you.com/v1/agents/runs",
    )


def make_response(status_code: int = 200, body: object = None, text: str | None = None) -> MagicMock:
    """A stand-in for ``httpx.Response`` with a status and a body."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text if text is not None else json.dumps(body)
    return resp


def make_client(response: MagicMock | None = None, side_effect: Exception | None = None) -> MagicMock:
    """A stand-in for ``YouComClient`` whose ``send`` returns ``response``."""
    client = MagicMock()
    client.send = AsyncMock(return_value=response, side_effect=side_effect)
    return client
