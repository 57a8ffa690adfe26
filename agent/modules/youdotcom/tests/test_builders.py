"""Tests for tool input validation and outbound request construction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.youdotcom.builders import (
    AUTH_SCHEMES,
    Capability,
    build_contents_request,
    build_express_request,
    build_search_request,
    build_user_agent,
    compose_search_query,
)
from modules.youdotcom.errors import ErrorKind, ToolError
from modules.youdotcom.models import ContentsQuery, ExpressAgentInput, SearchQuery
from modules.youdotcom.tests.fixtures import make_context
from shared.schemas.tools import ClientInfo

# ---------------------------------------------------------------------------
# User-Agent
# ---------------------------------------------------------------------------


def test_user_agent_unknown_client():
    assert build_user_agent("MCP", "1.0.0", None) == "MCP/1.0.0 (You.com; UNKNOWN)"


def test_user_agent_empty_client_info():
    assert build_user_agent("MCP", "1.0.0", ClientInfo()) == "MCP/1.0.0 (You.com; UNKNOWN)"


def test_user_agent_with_client_info():
    client = ClientInfo(name="claude-desktop", version="0.9.2", website_url="https://claude.ai")
    assert (
        build_user_agent("MCP", "1.2.3", client)
        == "MCP/1.2.3 (You.com; claude-desktop; 0.9.2; https://claude.ai)"
    )


# ---------------------------------------------------------------------------
# Search input validation
# ---------------------------------------------------------------------------


def test_search_count_above_maximum_rejected():
    with pytest.raises(ValidationError):
        SearchQuery.model_validate({"query": "test", "count": 25})


@pytest.mark.parametrize(
    "args",
    [
        {"query": ""},
        {"query": "test", "count": 0},
        {"query": "test", "count": "5"},
        {"query": "test", "count": True},
        {"query": "test", "offset": "1"},
        {"query": "test", "offset": 10},
        {"query": "test", "offset": -1},
        {"query": "test", "freshness": "hour"},
        {"query": "test", "country": "XX"},
        {"query": "test", "safesearch": "maybe"},
    ],
)
def test_search_invalid_inputs(args):
    with pytest.raises(ValidationError):
        SearchQuery.model_validate(args)


def test_search_accepts_camel_case_names():
    query = SearchQuery.model_validate({"query": "x", "fileType": "pdf", "exactTerms": "a|b"})
    assert query.file_type == "pdf"
    assert query.exact_terms == "a|b"


# ---------------------------------------------------------------------------
# Search query composition
# ---------------------------------------------------------------------------


def test_compose_plain_query():
    assert compose_search_query(SearchQuery(query="react components")) == "react components"


def test_compose_operators():
    query = SearchQuery.model_validate(
        {"query": "docs", "site": "github.com", "fileType": "md", "language": "en"}
    )
    assert compose_search_query(query) == "docs site:github.com filetype:md lang:en"


def test_compose_exact_terms():
    query = SearchQuery.model_validate({"query": "programming", "exactTerms": "javascript|typescript"})
    assert compose_search_query(query) == "programming +javascript AND +typescript"


def test_compose_exclude_terms_with_phrase():
    query = SearchQuery.model_validate({"query": "programming", "excludeTerms": "(social media)|ads"})
    assert compose_search_query(query) == "programming -(social media) AND -ads"


def test_compose_exact_terms_with_phrase():
    query = SearchQuery.model_validate({"query": "programming", "exactTerms": "(machine learning)|typescript"})
    assert compose_search_query(query) == "programming +(machine learning) AND +typescript"


def test_conflicting_terms_rejected():
    query = SearchQuery.model_validate(
        {"query": "tutorial", "exactTerms": "python", "excludeTerms": "beginner"}
    )
    with pytest.raises(ToolError) as exc_info:
        build_search_request(query, make_context())
    assert exc_info.value.kind == ErrorKind.CONFLICTING_PARAMETERS


def test_empty_filters_are_ignored():
    query = SearchQuery.model_validate(
        {
            "query": "test query",
            "site": "",
            "fileType": "",
            "language": "",
            "exactTerms": "",
            "excludeTerms": "",
        }
    )
    request = build_search_request(query, make_context())
    assert request.params == {"query": "test query"}


# ---------------------------------------------------------------------------
# Search request
# ---------------------------------------------------------------------------


def test_search_request_shape():
    query = SearchQuery.model_validate(
        {
            "query": "machine learning tutorial",
            "count": 5,
            "offset": 1,
            "freshness": "month",
            "country": "US",
            "safesearch": "moderate",
        }
    )
    request = build_search_request(query, make_context(api_key="k-123"))

    assert request.method == "GET"
    assert request.url == "https://api.ydc-index.io/v1/search"
    assert request.json is None
    assert request.params == {
        "query": "machine learning tutorial",
        "count": "5",
        "offset": "1",
        "freshness": "month",
        "country": "US",
        "safesearch": "moderate",
    }
    assert request.headers["X-API-Key"] == "k-123"
    assert "Authorization" not in request.headers
    assert request.headers["User-Agent"].startswith("MCP/")


def test_request_repr_hides_credential():
    request = build_search_request(SearchQuery(query="x"), make_context(api_key="super-secret"))
    assert "super-secret" not in repr(request)
    assert "super-secret" not in repr(make_context(api_key="super-secret"))


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


def test_contents_defaults_to_markdown():
    assert ContentsQuery(urls=["https://example.com"]).format == "markdown"


@pytest.mark.parametrize(
    "args",
    [
        {"urls": []},
        {"urls": ["not a url"]},
        {"urls": ["https://example.com"], "format": "pdf"},
    ],
)
def test_contents_invalid_inputs(args):
    with pytest.raises(ValidationError):
        ContentsQuery.model_validate(args)


def test_contents_request_batches_all_urls():
    query = ContentsQuery(urls=["https://example.com", "https://example.org/docs"], format="html")
    request = build_contents_request(query, make_context(api_key="k"))

    assert request.method == "POST"
    assert request.url == "https://ydc-index.io/v1/contents"
    assert request.json == {
        "urls": ["https://example.com", "https://example.org/docs"],
        "format": "html",
    }
    assert request.headers["X-API-Key"] == "k"
    assert request.headers["Content-Type"] == "application/json"


# ---------------------------------------------------------------------------
# Express agent
# ---------------------------------------------------------------------------


def test_express_rejects_empty_input():
    with pytest.raises(ValidationError):
        ExpressAgentInput.model_validate({"input": ""})


def test_express_rejects_unknown_tool():
    with pytest.raises(ValidationError):
        ExpressAgentInput.model_validate({"input": "hi", "tools": [{"type": "code_interpreter"}]})


def test_express_request_without_tools():
    request = build_express_request(ExpressAgentInput(input="hello"), make_context(api_key="k"))

    assert request.method == "POST"
    assert request.url == "https://api.you.com/v1/agents/runs"
    assert request.json == {"agent": "express", "input": "hello", "stream": False}
    assert "tools" not in request.json
    assert request.headers["Authorization"] == "Bearer k"
    assert "X-API-Key" not in request.headers
    assert request.headers["Accept"] == "application/json"


def test_express_request_with_web_search():
    agent_input = ExpressAgentInput.model_validate({"input": "news?", "tools": [{"type": "web_search"}]})
    request = build_express_request(agent_input, make_context())
    assert request.json["tools"] == [{"type": "web_search"}]
    assert request.json["stream"] is False


def test_auth_schemes_per_capability():
    assert AUTH_SCHEMES[Capability.SEARCH].headers_for("k") == {"X-API-Key": "k"}
    assert AUTH_SCHEMES[Capability.CONTENTS].headers_for("k") == {"X-API-Key": "k"}
    assert AUTH_SCHEMES[Capability.EXPRESS].headers_for("k") == {"Authorization": "Bearer k"}
