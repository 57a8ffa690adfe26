"""You.com tool implementations.

All three tools run through the same invocation pipeline::

    Validating -> BuildingRequest -> AwaitingUpstream -> Classifying
      -> ValidatingResponse -> Projecting -> Succeeded | Failed

Any failure jumps straight to ``Failed``; nothing is retried and no partial
structured output is returned. Capabilities differ only in the ``Pipeline``
entry that plugs their input model, request builder, response schema and
projector into that sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from modules.youdotcom.builders import (
    AUTH_SCHEMES,
    Capability,
    OutboundRequest,
    RequestContext,
    build_contents_request,
    build_express_request,
    build_search_request,
)
from modules.youdotcom.client import YouComClient
from modules.youdotcom.errors import (
    ErrorKind,
    ToolError,
    check_credential,
    classify_status,
    find_in_band_error,
    invalid_input,
    parse_json_body,
    schema_violation,
)
from modules.youdotcom.formatting import (
    Projection,
    project_contents,
    project_express,
    project_search,
)
from modules.youdotcom.models import (
    ContentsQuery,
    ExpressAgentInput,
    SearchQuery,
    TextContent,
    ToolOutcome,
)
from modules.youdotcom.report import generate_error_report_link
from modules.youdotcom.schemas import CONTENTS_RESPONSE, EXPRESS_RESPONSE, SEARCH_RESPONSE

logger = structlog.get_logger()

LogSink = Callable[[str, str], Awaitable[None]]


class InvocationState(str, Enum):
    VALIDATING = "Validating"
    BUILDING_REQUEST = "BuildingRequest"
    AWAITING_UPSTREAM = "AwaitingUpstream"
    CLASSIFYING = "Classifying"
    VALIDATING_RESPONSE = "ValidatingResponse"
    PROJECTING = "Projecting"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


async def structlog_sink(level: str, message: str) -> None:
    """Default log sink: forward tool notifications to structlog."""
    log = logger.error if level == "error" else logger.info
    log("youdotcom_tool_notification", level=level, message=message)


# ---------------------------------------------------------------------------
# Per-capability wiring
# ---------------------------------------------------------------------------


def _describe_search(query: SearchQuery, projection: Projection) -> str:
    counts = projection.structured["resultCounts"]
    if not counts["total"]:
        return f'No results found for query: "{query.query}"'
    return (
        f'Search successful for query: "{query.query}" - {counts["web"]} web results, '
        f'{counts["news"]} news results ({counts["total"]} total)'
    )


def _describe_contents(query: ContentsQuery, projection: Projection) -> str:
    return f"Contents API call successful: extracted {projection.structured['count']} page(s)"


def _describe_express(agent_input: ExpressAgentInput, projection: Projection) -> str:
    return f'Express agent call successful for input: "{agent_input.input}"'


def _check_contents(items: list, query: ContentsQuery) -> ToolError | None:
    # One item per submitted URL, so count always equals the number of URLs.
    if len(items) == len(query.urls):
        return None
    return ToolError(
        ErrorKind.SCHEMA_VIOLATION,
        f"Unexpected response from the You.com Contents API: expected {len(query.urls)} "
        f"item(s), one per URL, got {len(items)}",
    )


@dataclass(frozen=True)
class Pipeline:
    """Everything capability-specific about a tool invocation."""

    capability: Capability
    input_model: type[BaseModel]
    build_request: Callable[[Any, RequestContext], OutboundRequest]
    response_schema: TypeAdapter
    project: Callable[[Any, Any], Projection]
    describe: Callable[[Any, Projection], str]
    error_prefix: str = "Error"
    check_response: Callable[[Any, Any], ToolError | None] | None = None


PIPELINES: dict[Capability, Pipeline] = {
    Capability.SEARCH: Pipeline(
        capability=Capability.SEARCH,
        input_model=SearchQuery,
        build_request=build_search_request,
        response_schema=SEARCH_RESPONSE,
        project=lambda response, query: project_search(response, query.query),
        describe=_describe_search,
    ),
    Capability.CONTENTS: Pipeline(
        capability=Capability.CONTENTS,
        input_model=ContentsQuery,
        build_request=build_contents_request,
        response_schema=CONTENTS_RESPONSE,
        project=lambda response, query: project_contents(response, query.format),
        describe=_describe_contents,
        error_prefix="Error extracting contents",
        check_response=_check_contents,
    ),
    Capability.EXPRESS: Pipeline(
        capability=Capability.EXPRESS,
        input_model=ExpressAgentInput,
        build_request=build_express_request,
        response_schema=EXPRESS_RESPONSE,
        project=lambda response, agent_input: project_express(response),
        describe=_describe_express,
    ),
}


def _raise_if(error: ToolError | None) -> None:
    if error is not None:
        raise error


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class YouComTools:
    """Tool implementations backed by the You.com APIs."""

    def __init__(
        self,
        client: YouComClient,
        version: str,
        support_email: str = "support@you.com",
        log_sink: LogSink | None = None,
    ):
        self.client = client
        self.version = version
        self.support_email = support_email
        self.log_sink = log_sink or structlog_sink

    async def search(self, ctx: RequestContext, arguments: dict[str, Any]) -> ToolOutcome:
        """Web and news search."""
        return await self.invoke(Capability.SEARCH, arguments, ctx)

    async def contents(self, ctx: RequestContext, arguments: dict[str, Any]) -> ToolOutcome:
        """Extract full page content for one or more URLs."""
        return await self.invoke(Capability.CONTENTS, arguments, ctx)

    async def express(self, ctx: RequestContext, arguments: dict[str, Any]) -> ToolOutcome:
        """Fast AI answer, optionally grounded in web search."""
        return await self.invoke(Capability.EXPRESS, arguments, ctx)

    async def invoke(
        self, capability: Capability, arguments: dict[str, Any], ctx: RequestContext
    ) -> ToolOutcome:
        """Run one invocation to completion. Never raises."""
        pipeline = PIPELINES[capability]
        label = capability.label
        state = InvocationState.VALIDATING

        try:
            try:
                tool_input = pipeline.input_model.model_validate(arguments)
            except ValidationError as e:
                raise invalid_input(e) from e

            state = InvocationState.BUILDING_REQUEST
            _raise_if(check_credential(ctx.api_key))
            request = pipeline.build_request(tool_input, ctx)

            state = InvocationState.AWAITING_UPSTREAM
            response = await self.client.send(request)

            state = InvocationState.CLASSIFYING
            _raise_if(
                classify_status(
                    response.status_code,
                    response.text,
                    capability=label,
                    bearer_auth=AUTH_SCHEMES[capability].prefix == "Bearer",
                )
            )
            payload, parse_error = parse_json_body(response.text)
            _raise_if(parse_error)
            _raise_if(find_in_band_error(payload))

            state = InvocationState.VALIDATING_RESPONSE
            try:
                validated = pipeline.response_schema.validate_python(payload)
            except ValidationError as e:
                raise schema_violation(e, label) from e
            if pipeline.check_response is not None:
                _raise_if(pipeline.check_response(validated, tool_input))

            state = InvocationState.PROJECTING
            projection = pipeline.project(validated, tool_input)
        except ToolError as e:
            return await self._fail(pipeline, state, e, ctx)
        except Exception as e:
            logger.error(
                "youdotcom_unexpected_error",
                capability=capability.value,
                state=state.value,
                error=str(e),
                exc_info=True,
            )
            error = ToolError(ErrorKind.UNKNOWN, f"Unexpected error while calling the You.com {label} API")
            return await self._fail(pipeline, state, error, ctx)

        logger.info(
            "youdotcom_tool_succeeded",
            capability=capability.value,
            state=InvocationState.SUCCEEDED.value,
        )
        await self._notify("info", pipeline.describe(tool_input, projection))
        return ToolOutcome(
            content=[TextContent(text=block) for block in projection.text],
            structured_content=projection.structured,
            full_response=projection.full,
        )

    async def _fail(
        self,
        pipeline: Pipeline,
        failed_at: InvocationState,
        error: ToolError,
        ctx: RequestContext,
    ) -> ToolOutcome:
        capability = pipeline.capability
        logger.warning(
            "youdotcom_tool_failed",
            capability=capability.value,
            state=InvocationState.FAILED.value,
            failed_at=failed_at.value,
            kind=error.kind.value,
        )
        report_link = generate_error_report_link(
            error_message=error.message,
            tool=capability.value,
            client_info=ctx.user_agent,
            version=self.version,
            support_email=self.support_email,
        )
        await self._notify(
            "error",
            f"{capability.label} API call failed: {error.message}\n\nReport this issue: {report_link}",
        )
        return ToolOutcome(
            content=[TextContent(text=f"{pipeline.error_prefix}: {error.message}")],
            is_error=True,
            error_kind=error.kind,
        )

    async def _notify(self, level: str, message: str) -> None:
        """Deliver a notification; a failing sink never affects the result."""
        try:
            await self.log_sink(level, message)
        except Exception as e:
            logger.warning("youdotcom_log_sink_failed", level=level, error=str(e))
