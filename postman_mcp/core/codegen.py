"""
Action code generation.

Renders a request leaf into a JavaScript or TypeScript function that
performs the request with ``fetch``. This is a fixed-shape template
expansion keyed on (language, agent framework, body mode). It has no
model of parameter types and performs no check on the emitted code.

Supported combinations:

* language ``typescript`` adds an (empty) ``<name>Params`` interface and
  types the ``params`` argument; any other language renders plain
  JavaScript.
* framework: see ``FRAMEWORK_IMPORTS``; unknown or missing values add no
  import line. ``autogen`` has no JavaScript SDK and renders no import.
* body mode ``raw`` embeds the payload literally and sends it through
  ``JSON.stringify``; ``urlencoded`` builds a ``URLSearchParams`` from the
  declared fields. Other modes emit no body code.
"""

import json
import logging
from typing import List, Optional

from ..models.collection import RequestItem

logger = logging.getLogger(__name__)

LANGUAGES = ("javascript", "typescript")

AGENT_FRAMEWORKS = ("openai", "mistral", "gemini", "anthropic", "langchain", "autogen")

FRAMEWORK_IMPORTS = {
    "openai": "import OpenAI from 'openai';",
    "anthropic": "import Anthropic from '@anthropic-ai/sdk';",
    "mistral": "import { Mistral } from '@mistralai/mistralai';",
    "gemini": "import { GoogleGenerativeAI } from '@google/generative-ai';",
    "langchain": "import { tool } from '@langchain/core/tools';",
}


def build_target_url(request: RequestItem) -> str:
    """Host segments joined by ``.``, then ``/``, then path segments joined by ``/``."""
    host = ".".join(request.url.host)
    path = "/".join(request.url.path)
    if not host and not path and request.url.raw:
        # plain-string urls carry no segments
        return request.url.raw
    return f"{host}/{path}"


def _headers_block(request: RequestItem) -> List[str]:
    headers = {}
    for header in request.headers:
        headers[header.key] = header.value
    return [f"  const headers = {json.dumps(headers, indent=2)};"]


def _body_block(request: RequestItem) -> Optional[List[str]]:
    body = request.body
    if body is None:
        return None

    if body.mode == "raw":
        return [f"  const requestBody = {body.raw or '{}'};"]

    if body.mode == "urlencoded":
        lines = ["  const requestBody = new URLSearchParams();"]
        for field in body.urlencoded or []:
            lines.append(f"  requestBody.append('{field.key}', params.{field.key});")
        return lines

    return None


def generate_action_code(
    name: str,
    request: RequestItem,
    language: str,
    framework: Optional[str] = None
) -> str:
    """
    Generate the source of an async function performing ``request``.

    Args:
        name: Function name (used verbatim, also prefixes the params interface)
        request: The request leaf to render
        language: ``javascript`` or ``typescript``
        framework: Optional agent framework whose SDK import is prepended

    Returns:
        The generated source text
    """
    is_typescript = language == "typescript"
    method = (request.method or "GET").lower()

    lines: List[str] = []

    import_line = FRAMEWORK_IMPORTS.get(framework) if framework else None
    if import_line:
        lines.extend([import_line, ""])

    if is_typescript:
        # fields are not derived from the request yet
        lines.extend([f"interface {name}Params {{", "}", ""])

    signature = f"params: {name}Params" if is_typescript else "params"
    lines.append(f"export async function {name}({signature}) {{")
    lines.append(f"  const url = '{build_target_url(request)}';")

    has_headers = len(request.headers) > 0
    if has_headers:
        lines.extend(_headers_block(request))

    body_lines = _body_block(request)
    if body_lines:
        lines.extend(body_lines)

    lines.append("")
    lines.append("  const response = await fetch(url, {")
    lines.append(f"    method: '{method}',")
    if has_headers:
        lines.append("    headers,")
    if body_lines:
        body_expr = "requestBody" if request.body.mode == "urlencoded" else "JSON.stringify(requestBody)"
        lines.append(f"    body: {body_expr},")
    lines.append("  });")
    lines.append("")
    lines.append("  if (!response.ok) {")
    lines.append("    throw new Error(`HTTP error! status: ${response.status}`);")
    lines.append("  }")
    lines.append("")
    lines.append("  return await response.json();")
    lines.append("}")

    logger.debug(
        "Generated action code",
        extra={"action_name": name, "language": language, "framework": framework}
    )

    return "\n".join(lines) + "\n"
