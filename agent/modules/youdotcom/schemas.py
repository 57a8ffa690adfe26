"""Strict schemas for You.com upstream responses.

Required fields must be present with the right types. Fields the APIs add
beyond these (thumbnails, favicons, ...) are kept so the full response can be
handed back untouched.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, strict=True)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class WebResult(_Upstream):
    url: str
    title: str
    description: str
    snippets: list[str]
    page_age: str | None = None
    authors: list[str] | None = None


class NewsResult(_Upstream):
    url: str
    title: str
    description: str
    page_age: str


class SearchResults(_Upstream):
    web: list[WebResult] | None = None
    news: list[NewsResult] | None = None


class SearchMetadata(_Upstream):
    request_uuid: str | None = None
    query: str | None = None
    latency: float | None = None


class SearchResponse(_Upstream):
    results: SearchResults
    metadata: SearchMetadata


SEARCH_RESPONSE = TypeAdapter(SearchResponse)


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


class ContentsItem(_Upstream):
    url: str
    title: str
    markdown: str | None = None
    html: str | None = None


ContentsResponse = list[ContentsItem]

CONTENTS_RESPONSE = TypeAdapter(ContentsResponse)


# ---------------------------------------------------------------------------
# Express agent
# ---------------------------------------------------------------------------


class SearchResultItem(_Upstream):
    url: str | None = None
    citation_uri: str | None = None
    title: str
    snippet: str
    source_type: str | None = None
    thumbnail_url: str | None = None
    provider: Any = None

    @model_validator(mode="after")
    def _require_a_link(self) -> SearchResultItem:
        if not (self.url or self.citation_uri):
            raise ValueError("search result needs a url or a citation_uri")
        return self

    @property
    def link(self) -> str:
        return self.url or self.citation_uri or ""


class SearchResultsOutput(_Upstream):
    type: Literal["web_search.results"]
    content: list[SearchResultItem]


class AnswerOutput(_Upstream):
    type: Literal["message.answer"]
    text: str


ExpressOutputItem = Annotated[
    Union[SearchResultsOutput, AnswerOutput],
    Field(discriminator="type"),
]


class ExpressAgentResponse(_Upstream):
    output: list[ExpressOutputItem]
    agent: str | None = None
    mode: str | None = None
    input: list[Any] | None = None

    @model_validator(mode="after")
    def _exactly_one_answer(self) -> ExpressAgentResponse:
        answers = sum(1 for item in self.output if isinstance(item, AnswerOutput))
        if answers != 1:
            raise ValueError(
                f"expected exactly one 'message.answer' output element, found {answers}"
            )
        return self

    @property
    def answer(self) -> AnswerOutput:
        return next(item for item in self.output if isinstance(item, AnswerOutput))

    @property
    def search_results(self) -> SearchResultsOutput | None:
        return next(
            (item for item in self.output if isinstance(item, SearchResultsOutput)),
            None,
        )


EXPRESS_RESPONSE = TypeAdapter(ExpressAgentResponse)
