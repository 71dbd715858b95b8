# File: landpro/services/llm_client.py

"""
Thin client for the hosted LLM (OpenAI-compatible chat completions).

One request per call and no retries. Upstream statuses are mapped onto the
LandPro error taxonomy:

    429            -> UpstreamRateLimitError
    402            -> UpstreamPaymentRequiredError
    other non-2xx  -> UpstreamError
    timeout/IO     -> UpstreamError
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from landpro.core.errors import (
    ConfigurationError,
    ResponseParseError,
    UpstreamError,
    UpstreamPaymentRequiredError,
    UpstreamRateLimitError,
)

logger = logging.getLogger("landpro.llm")

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?|\n?```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def parse_model_json(text: Optional[str]) -> Dict[str, Any]:
    """Decode a model reply that should be a JSON object, fenced or not."""
    if not text or not text.strip():
        raise ResponseParseError("The AI service returned an empty response.")
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        logger.warning("Unparseable model reply: %.300s", text)
        raise ResponseParseError()
    if not isinstance(data, dict):
        raise ResponseParseError()
    return data


def message_json(message: Dict[str, Any], tool_name: Optional[str] = None) -> Dict[str, Any]:
    """
    JSON payload of an assistant message: the arguments of the named tool
    call when present, otherwise the message text.
    """
    for call in message.get("tool_calls") or []:
        fn = call.get("function") or {}
        if tool_name is None or fn.get("name") == tool_name:
            return parse_model_json(fn.get("arguments"))
    return parse_model_json(message.get("content"))


class ChatCompletionClient:
    def __init__(
        self,
        api_key: Optional[str],
        api_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    def complete(
        self,
        *,
        model: str,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        tools: Optional[List[dict]] = None,
        tool_choice: Optional[dict] = None,
    ) -> Dict[str, Any]:
        """Send one completion request and return the first choice's message."""
        if not self.api_key:
            raise ConfigurationError("AI service not configured")

        body: Dict[str, Any] = {"model": model, "messages": messages}
        if temperature is not None:
            body["temperature"] = temperature
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        if tools:
            body["tools"] = tools
        if tool_choice:
            body["tool_choice"] = tool_choice

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.post(self.api_url, headers=headers, json=body)
        except httpx.TimeoutException:
            logger.error("LLM request timed out after %ss", self.timeout)
            raise UpstreamError("AI service timed out. Please try again.")
        except httpx.HTTPError as exc:
            logger.error("LLM request failed: %s", exc)
            raise UpstreamError("AI service request failed")

        if r.is_error:
            logger.error(
                "LLM error %s: %.500s",
                r.status_code,
                r.text,
                extra={"upstream": "llm", "upstream_status": r.status_code},
            )
        if r.status_code == 429:
            raise UpstreamRateLimitError()
        if r.status_code == 402:
            raise UpstreamPaymentRequiredError()
        if r.is_error:
            raise UpstreamError("AI service request failed")

        try:
            data = r.json()
            message = data["choices"][0]["message"]
        except (ValueError, KeyError, IndexError, TypeError):
            logger.error("Malformed LLM envelope: %.500s", r.text)
            raise ResponseParseError("Invalid AI response")
        return message
