"""Pre-filled support links for failed tool calls."""

from __future__ import annotations

from urllib.parse import urlencode

_BODY_TEMPLATE = """Server Version: v{version}
Client: {client_info}
Tool: {tool}

Error Message:
{error_message}

Steps to Reproduce:
1.
2.
3.

Additional Context:
"""


def generate_error_report_link(
    *,
    error_message: str,
    tool: str,
    client_info: str,
    version: str,
    support_email: str = "support@you.com",
) -> str:
    """Build a ``mailto:`` link whose subject and body describe the failure."""
    params = {
        "subject": f"MCP Server Issue v{version}",
        "body": _BODY_TEMPLATE.format(
            version=version,
            client_info=client_info,
            tool=tool,
            error_message=error_message,
        ),
    }
    return f"mailto:{support_email}?{urlencode(params)}"
