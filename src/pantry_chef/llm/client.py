"""
Pantry Chef - Text Provider Client.

JSON-mode requests against DeepSeek and OpenAI. Every provider call goes
through `provider_boundary`, which imposes a timeout and turns expected
provider failures into None:

- network and HTTP status errors (openai.APIError, httpx.HTTPError)
- timeouts
- unparseable JSON or a body that does not fit the expected schema

Anything else (a bug in our own code) propagates. Each provider gets a
single attempt: SDK retries are disabled.
"""

import asyncio
import functools
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from pantry_chef.config import settings

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")
M = TypeVar("M", bound=BaseModel)

Message = dict[str, str]

PROVIDER_FAILURES: tuple[type[BaseException], ...] = (
    openai.APIError,
    httpx.HTTPError,
    TimeoutError,
    json.JSONDecodeError,
    ValidationError,
)


def provider_boundary(name: str) -> Callable[[Callable[P, Awaitable[R | None]]], Callable[P, Awaitable[R | None]]]:
    """Collapse a provider call's expected failures (and timeouts) to None."""

    def decorator(fn: Callable[P, Awaitable[R | None]]) -> Callable[P, Awaitable[R | None]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R | None:
            try:
                return await asyncio.wait_for(fn(*args, **kwargs), timeout=settings.provider_timeout_seconds)
            except PROVIDER_FAILURES as e:
                logger.warning(f"{name} unavailable: {type(e).__name__}: {e}")
                return None

        return wrapper

    return decorator


def message(role: str, content: str) -> Message:
    return {"role": role, "content": content}


def strip_code_fences(content: str) -> str:
    """Remove a ```json ... ``` wrapper some models add despite JSON mode."""
    content = content.strip()
    if not content.startswith("```"):
        return content

    lines = content.split("\n")
    if lines[0].startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines)


def parse_json_payload(raw: str | None, schema: type[M]) -> M | None:
    """Validate a JSON string against a schema. Empty input is None."""
    if not raw or not raw.strip():
        return None
    return schema.model_validate_json(strip_code_fences(raw))


def response_output_text(response: Any) -> str | None:
    """
    Text of an OpenAI Responses API result.

    Prefers the aggregated `output_text`, then the first `output_text`
    content item.
    """
    direct = getattr(response, "output_text", None)
    if isinstance(direct, str) and direct.strip():
        return direct

    for item in getattr(response, "output", None) or []:
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text" and isinstance(getattr(content, "text", None), str):
                return content.text

    return None


@provider_boundary("DeepSeek")
async def deepseek_json_request(messages: list[Message], schema: type[M]) -> M | None:
    """Chat completion in JSON mode against DeepSeek's OpenAI-compatible API."""
    if not settings.has_deepseek_key:
        return None

    client = AsyncOpenAI(
        api_key=settings.deepseek_api_key,
        base_url=settings.deepseek_base_url,
        max_retries=0,
    )
    response = await client.chat.completions.create(
        model=settings.deepseek_text_model,
        messages=messages,
        response_format={"type": "json_object"},
    )

    if not response.choices:
        return None
    return parse_json_payload(response.choices[0].message.content, schema)


@provider_boundary("OpenAI")
async def openai_json_request(messages: list[Message], schema: type[M]) -> M | None:
    """Responses API call in JSON mode against OpenAI."""
    if not settings.has_openai_key:
        return None

    client = AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)
    response = await client.responses.create(
        model=settings.openai_text_model,
        input=messages,
        text={"format": {"type": "json_object"}},
    )

    return parse_json_payload(response_output_text(response), schema)


def is_ai_configured() -> bool:
    return settings.has_deepseek_key or settings.has_openai_key
