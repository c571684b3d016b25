"""LangChain ChatAnthropic wrapper for the measurement summary.

The answer is opaque text. Provider failures come back as a message, never as
an exception, so the geometry model is never affected.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator

from metre.config import settings
from metre.llm.prompts import SYSTEM_PROMPT, build_summary_prompt
from metre.llm.report import ReportRow

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "[LLM not configured — set ANTHROPIC_API_KEY in .env]"
SUMMARY_FAILED = "Une erreur est survenue lors de l'analyse. Vérifiez votre clé API."
EMPTY_ANSWER = "Désolé, je n'ai pas pu générer l'analyse."


def _messages(report: list[ReportRow]) -> list:
    from langchain_core.messages import HumanMessage, SystemMessage

    prompt = build_summary_prompt([row.model_dump() for row in report])
    return [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=prompt)]


def _llm():
    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(
        model=settings.model_summary,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.summary_max_tokens,
    )


async def summarize(report: list[ReportRow]) -> str:
    """Free-text summary of the report."""
    if not settings.anthropic_api_key:
        return NOT_CONFIGURED

    try:
        response = await _llm().ainvoke(_messages(report))
    except Exception as e:
        logger.error("Summary call failed: %s", e)
        return SUMMARY_FAILED
    return str(response.content) or EMPTY_ANSWER


async def stream_summary(report: list[ReportRow]) -> AsyncGenerator[str, None]:
    """SSE events carrying the summary as it is generated."""
    if not settings.anthropic_api_key:
        data = json.dumps({"type": "response", "content": NOT_CONFIGURED})
        yield f"event: response\ndata: {data}\n\n"
        yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"
        return

    try:
        async for chunk in _llm().astream(_messages(report)):
            if isinstance(chunk.content, list):
                for block in chunk.content:
                    text = block.get("text", "") if block.get("type") == "text" else ""
                    if text:
                        data = json.dumps({"type": "response", "content": text})
                        yield f"event: response\ndata: {data}\n\n"
            elif isinstance(chunk.content, str) and chunk.content:
                data = json.dumps({"type": "response", "content": chunk.content})
                yield f"event: response\ndata: {data}\n\n"
    except Exception as e:
        logger.error("Summary stream failed: %s", e)
        data = json.dumps({"type": "error", "content": SUMMARY_FAILED})
        yield f"event: error\ndata: {data}\n\n"

    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"
