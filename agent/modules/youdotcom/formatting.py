"""Projection of validated You.com responses into tool output.

Every projector returns three views of the same response:

* ``structured``: compact, token-efficient data (counts, titles, URLs)
* ``text``: ordered human-readable blocks; URLs are left out to save tokens,
  except for contents where the page text is the point
* ``full``: the validated response with exactly the fields upstream sent,
  for callers that need snippets and everything else the compact view drops

Projectors are pure: the same response always yields identical output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from modules.youdotcom.models import (
    ContentsItemOut,
    ContentsStructuredContent,
    ExpressResultLinks,
    ExpressStructuredContent,
    LinkItem,
    ResultCounts,
    SearchResultLinks,
    SearchStructuredContent,
    dump_structured,
)
from modules.youdotcom.schemas import (
    CONTENTS_RESPONSE,
    ContentsResponse,
    ExpressAgentResponse,
    NewsResult,
    SearchResponse,
    WebResult,
)

NO_RESULTS = "No results found."
SECTION_SEPARATOR = "=" * 50


@dataclass(frozen=True)
class Projection:
    structured: dict[str, Any]
    text: list[str]
    full: Any


def format_results_text(results: Iterable[Any]) -> str:
    """Render search-style results as Title / Description / Snippet lines.

    Accepts web results (``description`` + ``snippets``) and agent results
    (single ``snippet``).
    """
    blocks = []
    for result in results:
        parts = [f"Title: {result.title}"]
        description = getattr(result, "description", None)
        if description:
            parts.append(f"Description: {description}")
        snippets = getattr(result, "snippets", None)
        snippet = getattr(result, "snippet", None)
        if snippets:
            parts.append("Snippets:\n- " + "\n- ".join(snippets))
        elif snippet:
            parts.append(f"Snippet: {snippet}")
        blocks.append("\n".join(parts))
    return "\n\n".join(blocks)


def _format_news_text(articles: list[NewsResult]) -> str:
    return "\n\n---\n\n".join(
        f"Title: {a.title}\nDescription: {a.description}\nPublished: {a.page_age}"
        for a in articles
    )


def _links(results: Iterable[WebResult | NewsResult]) -> list[LinkItem]:
    return [LinkItem(url=r.url, title=r.title) for r in results]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def project_search(response: SearchResponse, query: str | None = None) -> Projection:
    web = response.results.web or []
    news = response.results.news or []

    links = None
    if web or news:
        links = SearchResultLinks(
            web=_links(web) if web else None,
            news=_links(news) if news else None,
        )
    structured = SearchStructuredContent(
        result_counts=ResultCounts(web=len(web), news=len(news), total=len(web) + len(news)),
        results=links,
    )
    full = response.model_dump(mode="json", exclude_unset=True)

    if not web and not news:
        return Projection(structured=dump_structured(structured), text=[NO_RESULTS], full=full)

    sections = []
    if web:
        sections.append(f"WEB RESULTS:\n\n{format_results_text(web)}")
    if news:
        sections.append(f"NEWS RESULTS:\n\n{_format_news_text(news)}")

    shown_query = response.metadata.query or query or ""
    body = f"\n\n{SECTION_SEPARATOR}\n\n".join(sections)
    return Projection(
        structured=dump_structured(structured),
        text=[f'Search Results for "{shown_query}":\n\n{body}'],
        full=full,
    )


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


def project_contents(response: ContentsResponse, format: str) -> Projection:
    """Render extracted pages; the response holds one item per submitted URL."""
    lines = [f"Successfully extracted content from {len(response)} URL(s):\n"]
    items = []

    for item in response:
        content = (item.html if format == "html" else item.markdown) or ""
        lines.extend(
            [
                f"\n## {item.title}",
                f"URL: {item.url}",
                f"Format: {format}",
                f"Content Length: {len(content)} characters\n",
                "---\n",
                content,
                "\n---\n",
            ]
        )
        items.append(
            ContentsItemOut(
                url=item.url,
                title=item.title,
                content=content,
                content_length=len(content),
            )
        )

    structured = ContentsStructuredContent(count=len(response), format=format, items=items)
    return Projection(
        structured=dump_structured(structured),
        text=["\n".join(lines)],
        full=CONTENTS_RESPONSE.dump_python(response, mode="json", exclude_unset=True),
    )


# ---------------------------------------------------------------------------
# Express agent
# ---------------------------------------------------------------------------


def project_express(response: ExpressAgentResponse) -> Projection:
    answer = response.answer.text
    search = response.search_results

    links = None
    if search is not None:
        links = ExpressResultLinks(
            web=[LinkItem(url=item.link, title=item.title) for item in search.content]
        )
    structured = ExpressStructuredContent(
        answer=answer,
        has_results=search is not None,
        result_count=len(search.content) if search is not None else 0,
        agent=response.agent,
        results=links,
    )

    text = [f"Express Agent Answer:\n\n{answer}"]
    if search is not None and search.content:
        text.append(f"\nSearch Results:\n\n{format_results_text(search.content)}")

    return Projection(
        structured=dump_structured(structured),
        text=text,
        full=response.model_dump(mode="json", exclude_unset=True),
    )
