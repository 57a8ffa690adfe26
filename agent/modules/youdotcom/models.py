"""Pydantic models for tool inputs and structured tool outputs."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
)
from pydantic.alias_generators import to_camel

from modules.youdotcom.errors import ErrorKind

# ---------------------------------------------------------------------------
# Tool inputs
# ---------------------------------------------------------------------------

Country = Literal[
    "AR", "AU", "AT", "BE", "BR", "CA", "CL", "DK", "FI", "FR", "DE", "HK",
    "IN", "ID", "IT", "JP", "KR", "MY", "MX", "NL", "NZ", "NO", "CN", "PL",
    "PT", "PH", "RU", "SA", "ZA", "ES", "SE", "CH", "TW", "TR", "GB", "US",
]


class SearchQuery(BaseModel):
    """Arguments of the search tool."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    query: str = Field(min_length=1, description="Search query (supports +, -, site:, filetype:, lang:)")
    count: int | None = Field(default=None, ge=1, le=20, description="Max results per section")
    freshness: Literal["day", "week", "month", "year"] | None = None
    offset: int | None = Field(default=None, ge=0, le=9, description="Pagination offset")
    country: Country | None = None
    safesearch: Literal["off", "moderate", "strict"] | None = None
    site: str | None = None
    file_type: str | None = Field(default=None, alias="fileType")
    language: str | None = Field(default=None, description="ISO 639-1 language code")
    exclude_terms: str | None = Field(default=None, alias="excludeTerms")
    exact_terms: str | None = Field(default=None, alias="exactTerms")


_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # Validate only; the URL is forwarded exactly as the caller wrote it.
    _URL_ADAPTER.validate_python(value)
    return value


class ContentsQuery(BaseModel):
    """Arguments of the contents tool."""

    model_config = ConfigDict(frozen=True, strict=True)

    urls: list[Annotated[str, AfterValidator(_check_url)]] = Field(
        min_length=1, description="URLs to extract content from"
    )
    format: Literal["markdown", "html"] = "markdown"


class ExpressTool(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    type: Literal["web_search"]


class ExpressAgentInput(BaseModel):
    """Arguments of the express agent tool."""

    model_config = ConfigDict(frozen=True, strict=True)

    input: str = Field(min_length=1, description="Query or prompt")
    tools: list[ExpressTool] | None = None


# ---------------------------------------------------------------------------
# Structured outputs (camelCase on the wire)
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkItem(_CamelModel):
    url: str
    title: str


class ResultCounts(_CamelModel):
    web: int
    news: int
    total: int


class SearchResultLinks(_CamelModel):
    web: list[LinkItem] | None = None
    news: list[LinkItem] | None = None


class SearchStructuredContent(_CamelModel):
    result_counts: ResultCounts
    results: SearchResultLinks | None = None


class ContentsItemOut(_CamelModel):
    url: str
    title: str
    content: str
    content_length: int


class ContentsStructuredContent(_CamelModel):
    count: int
    format: str
    items: list[ContentsItemOut]


class ExpressResultLinks(_CamelModel):
    web: list[LinkItem]


class ExpressStructuredContent(_CamelModel):
    answer: str
    has_results: bool
    result_count: int
    agent: str | None = None
    results: ExpressResultLinks | None = None


def dump_structured(model: BaseModel) -> dict[str, Any]:
    """Serialise a structured output with wire names, dropping unset optionals."""
    return model.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Invocation envelope
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolOutcome(BaseModel):
    """What every tool invocation returns, success or failure."""

    content: list[TextContent]
    structured_content: dict[str, Any] | None = None
    full_response: Any = None
    is_error: bool = False
    error_kind: ErrorKind | None = None

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)
