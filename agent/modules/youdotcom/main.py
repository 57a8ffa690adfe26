"""You.com module — FastAPI service."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import Depends, FastAPI

from modules.youdotcom.builders import RequestContext, build_user_agent
from modules.youdotcom.client import YouComClient
from modules.youdotcom.manifest import MANIFEST, MODULE_VERSION
from modules.youdotcom.tools import YouComTools
from shared.auth import get_upstream_api_key, require_service_auth
from shared.config import get_settings
from shared.schemas.common import HealthResponse
from shared.schemas.tools import ClientInfo, ModuleManifest, ToolCall, ToolResult

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
)

logger = structlog.get_logger()
app = FastAPI(title="You.com Module", version=MODULE_VERSION)

tools: YouComTools | None = None


@app.on_event("startup")
async def startup():
    global tools
    settings = get_settings()
    tools = YouComTools(
        YouComClient(timeout=settings.upstream_timeout),
        version=MODULE_VERSION,
        support_email=settings.support_email,
    )
    if not settings.ydc_api_key:
        logger.warning("youdotcom_api_key_missing", hint="Set YDC_API_KEY or send X-API-Key per request")
    logger.info("youdotcom_module_ready")


def _request_context(api_key: str, client: ClientInfo | None) -> RequestContext:
    settings = get_settings()
    return RequestContext(
        api_key=api_key,
        user_agent=build_user_agent(settings.user_agent_product, MODULE_VERSION, client),
        search_url=settings.ydc_search_url,
        contents_url=settings.ydc_contents_url,
        agents_url=settings.ydc_agents_url,
    )


@app.get("/manifest", response_model=ModuleManifest)
async def manifest(_=Depends(require_service_auth)):
    """Return the module manifest."""
    return MANIFEST


@app.post("/execute", response_model=ToolResult)
async def execute(
    call: ToolCall,
    _=Depends(require_service_auth),
    api_key: str = Depends(get_upstream_api_key),
):
    """Execute a tool call."""
    if tools is None:
        return ToolResult(tool_name=call.tool_name, success=False, error="Module not ready")

    try:
        tool_name = call.tool_name.split(".")[-1]
        args = dict(call.arguments)
        ctx = _request_context(api_key, call.client)

        if tool_name == "search":
            outcome = await tools.search(ctx, args)
        elif tool_name == "contents":
            outcome = await tools.contents(ctx, args)
        elif tool_name == "express":
            outcome = await tools.express(ctx, args)
        else:
            return ToolResult(
                tool_name=call.tool_name,
                success=False,
                error=f"Unknown tool: {call.tool_name}",
            )

        return ToolResult(
            tool_name=call.tool_name,
            success=not outcome.is_error,
            result=outcome.model_dump(mode="json", exclude_none=True),
            error=outcome.text if outcome.is_error else None,
        )
    except Exception as e:
        logger.error("tool_execution_error", tool=call.tool_name, error=str(e), exc_info=True)
        return ToolResult(tool_name=call.tool_name, success=False, error="Internal error processing request")


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        service="youdotcom",
        version=MODULE_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
