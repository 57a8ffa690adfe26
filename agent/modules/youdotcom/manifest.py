"""You.com module manifest — tool definitions."""

from typing import get_args

from modules.youdotcom.models import (
    ContentsStructuredContent,
    Country,
    ExpressStructuredContent,
    SearchStructuredContent,
)
from shared.schemas.tools import ModuleManifest, ToolDefinition, ToolParameter

MODULE_VERSION = "1.0.0"

_COUNTRIES = list(get_args(Country))

MANIFEST = ModuleManifest(
    module_name="youdotcom",
    description="Search the web and news, extract page contents, and get fast AI answers using the You.com APIs.",
    version=MODULE_VERSION,
    tools=[
        ToolDefinition(
            name="youdotcom.search",
            title="You.com Search",
            description=(
                "Performs a web and news search using the You.com Search API. "
                "Returns result counts and titles with URLs. "
                "Example: 'Find recent articles about TypeScript 5.'"
            ),
            parameters=[
                ToolParameter(
                    name="query",
                    type="string",
                    description="Search query (supports +, -, site:, filetype:, lang:)",
                ),
                ToolParameter(
                    name="count",
                    type="integer",
                    description="Max results per section (1-20)",
                    required=False,
                ),
                ToolParameter(
                    name="freshness",
                    type="string",
                    description="Filter by freshness",
                    required=False,
                    enum=["day", "week", "month", "year"],
                ),
                ToolParameter(
                    name="offset",
                    type="integer",
                    description="Pagination offset (0-9)",
                    required=False,
                ),
                ToolParameter(
                    name="country",
                    type="string",
                    description="Country code",
                    required=False,
                    enum=_COUNTRIES,
                ),
                ToolParameter(
                    name="safesearch",
                    type="string",
                    description="Filter level",
                    required=False,
                    enum=["off", "moderate", "strict"],
                ),
                ToolParameter(
                    name="site",
                    type="string",
                    description="Restrict results to a domain (e.g. 'github.com')",
                    required=False,
                ),
                ToolParameter(
                    name="fileType",
                    type="string",
                    description="File type (e.g. 'pdf')",
                    required=False,
                ),
                ToolParameter(
                    name="language",
                    type="string",
                    description="ISO 639-1 language code",
                    required=False,
                ),
                ToolParameter(
                    name="excludeTerms",
                    type="string",
                    description="Terms to exclude, pipe-separated; wrap phrases in parentheses. Cannot be combined with exactTerms",
                    required=False,
                ),
                ToolParameter(
                    name="exactTerms",
                    type="string",
                    description="Terms that must appear, pipe-separated; wrap phrases in parentheses. Cannot be combined with excludeTerms",
                    required=False,
                ),
            ],
            output_schema=SearchStructuredContent.model_json_schema(by_alias=True),
            required_permission="guest",
        ),
        ToolDefinition(
            name="youdotcom.contents",
            title="Extract Web Page Contents",
            description=(
                "Extract the full content of one or more web pages in markdown or HTML. "
                "Example: 'Read https://example.com/docs and summarize it.'"
            ),
            parameters=[
                ToolParameter(
                    name="urls",
                    type="array",
                    description="URLs to extract content from (at least one)",
                ),
                ToolParameter(
                    name="format",
                    type="string",
                    description="Output format: markdown (text) or html (layout). Default: markdown",
                    required=False,
                    enum=["markdown", "html"],
                ),
            ],
            output_schema=ContentsStructuredContent.model_json_schema(by_alias=True),
            required_permission="guest",
        ),
        ToolDefinition(
            name="youdotcom.express",
            title="Express Agent",
            description=(
                "Fast AI answers, optionally grounded in a web search. "
                "Example: 'What is the capital of Australia?'"
            ),
            parameters=[
                ToolParameter(
                    name="input",
                    type="string",
                    description="Query or prompt",
                ),
                ToolParameter(
                    name="tools",
                    type="array",
                    description="Tools to enable, e.g. [{\"type\": \"web_search\"}] (web search only)",
                    required=False,
                ),
            ],
            output_schema=ExpressStructuredContent.model_json_schema(by_alias=True),
            required_permission="guest",
        ),
    ],
)
