"""Outbound request construction for each You.com capability."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from modules.youdotcom.errors import ErrorKind, ToolError
from modules.youdotcom.models import ContentsQuery, ExpressAgentInput, SearchQuery
from shared.schemas.tools import ClientInfo


class Capability(str, Enum):
    SEARCH = "search"
    CONTENTS = "contents"
    EXPRESS = "express"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Capability.SEARCH: "Search",
    Capability.CONTENTS: "Contents",
    Capability.EXPRESS: "Express Agent",
}


@dataclass(frozen=True)
class AuthScheme:
    """How a capability presents the API key."""

    header: str
    prefix: str | None = None

    def headers_for(self, api_key: str) -> dict[str, str]:
        value = f"{self.prefix} {api_key}" if self.prefix else api_key
        return {self.header: value}


# The index APIs take an API-key header; the agent API takes a bearer token.
AUTH_SCHEMES: dict[Capability, AuthScheme] = {
    Capability.SEARCH: AuthScheme(header="X-API-Key"),
    Capability.CONTENTS: AuthScheme(header="X-API-Key"),
    Capability.EXPRESS: AuthScheme(header="Authorization", prefix="Bearer"),
}

UNKNOWN_CLIENT = "UNKNOWN"


def build_user_agent(product: str, version: str, client: ClientInfo | None) -> str:
    """Compose ``<product>/<version> (You.com; <caller>)``."""
    caller = client.describe() if client else ""
    return f"{product}/{version} (You.com; {caller or UNKNOWN_CLIENT})"


@dataclass(frozen=True)
class RequestContext:
    """Per-invocation configuration, injected by the host."""

    api_key: str = field(repr=False)
    user_agent: str
    search_url: str
    contents_url: str
    agents_url: str


@dataclass(frozen=True)
class OutboundRequest:
    """A fully specified upstream HTTP request.

    Header values are left out of ``repr`` since they carry the credential.
    """

    capability: Capability
    method: str
    url: str
    headers: dict[str, str] = field(repr=False)
    params: dict[str, str] | None = None
    json: Any = None


def _base_headers(capability: Capability, ctx: RequestContext) -> dict[str, str]:
    headers = AUTH_SCHEMES[capability].headers_for(ctx.api_key)
    headers["User-Agent"] = ctx.user_agent
    return headers


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def _split_terms(terms: str) -> list[str]:
    return [t.strip() for t in terms.split("|") if t.strip()]


def compose_search_query(query: SearchQuery) -> str:
    """Fold the operator filters and term lists into one query string."""
    if query.exact_terms and query.exclude_terms:
        raise ToolError(
            ErrorKind.CONFLICTING_PARAMETERS,
            "Cannot specify both exactTerms and excludeTerms - please use only one",
        )

    parts = [query.query]
    if query.site:
        parts.append(f"site:{query.site}")
    if query.file_type:
        parts.append(f"filetype:{query.file_type}")
    if query.language:
        parts.append(f"lang:{query.language}")

    # Parenthesized phrases such as "(machine learning)" pass through as-is.
    if query.exact_terms:
        terms = _split_terms(query.exact_terms)
        if terms:
            parts.append(" AND ".join(f"+{t}" for t in terms))
    elif query.exclude_terms:
        terms = _split_terms(query.exclude_terms)
        if terms:
            parts.append(" AND ".join(f"-{t}" for t in terms))

    return " ".join(parts)


_SEARCH_PARAMS = ("count", "freshness", "offset", "country", "safesearch")


def build_search_request(query: SearchQuery, ctx: RequestContext) -> OutboundRequest:
    params = {"query": compose_search_query(query)}
    for name in _SEARCH_PARAMS:
        value = getattr(query, name)
        if value:
            params[name] = str(value)

    return OutboundRequest(
        capability=Capability.SEARCH,
        method="GET",
        url=ctx.search_url,
        headers=_base_headers(Capability.SEARCH, ctx),
        params=params,
    )


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


def build_contents_request(query: ContentsQuery, ctx: RequestContext) -> OutboundRequest:
    headers = _base_headers(Capability.CONTENTS, ctx)
    headers["Content-Type"] = "application/json"
    return OutboundRequest(
        capability=Capability.CONTENTS,
        method="POST",
        url=ctx.contents_url,
        headers=headers,
        json={"urls": list(query.urls), "format": query.format},
    )


# ---------------------------------------------------------------------------
# Express agent
# ---------------------------------------------------------------------------


def build_express_request(agent_input: ExpressAgentInput, ctx: RequestContext) -> OutboundRequest:
    body: dict[str, Any] = {
        "agent": "express",
        "input": agent_input.input,
        "stream": False,
    }
    if agent_input.tools is not None:
        body["tools"] = [tool.model_dump() for tool in agent_input.tools]

    headers = _base_headers(Capability.EXPRESS, ctx)
    headers["Content-Type"] = "application/json"
    headers["Accept"] = "application/json"
    return OutboundRequest(
        capability=Capability.EXPRESS,
        method="POST",
        url=ctx.agents_url,
        headers=headers,
        json=body,
    )
