# app_builder/core/llm_client.py
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel

from app_builder.core.config import Settings
from app_builder.core.errors import UpstreamError
from app_builder.models import AppSpec

logger = logging.getLogger(__name__)


# -------------------------
# Tagged model output
# -------------------------
@dataclass(frozen=True)
class ParsedOutput:
    """The model already returned a structured object."""
    value: Any


@dataclass(frozen=True)
class RawOutput:
    """Only the generated text is available."""
    text: Optional[str]


ModelOutput = Union[ParsedOutput, RawOutput]


class CompletionClient(Protocol):
    def complete(self, instructions: str, text: str, max_output_tokens: int) -> ModelOutput:
        ...


# -------------------------
# Debug records
# -------------------------
def save_debug_log(log_dir: str, prefix: str, payload: Dict[str, Any]) -> Optional[str]:
    fname = f"{int(time.time() * 1000)}_{prefix}.json"
    path = os.path.join(log_dir, fname)
    try:
        os.makedirs(log_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False, default=str)
        return path
    except Exception:
        logger.exception("Failed to write debug log")
        return None


# -------------------------
# LLM init + structured call
# -------------------------
def get_llm(settings: Settings) -> ChatGoogleGenerativeAI:
    if not settings.api_key:
        raise RuntimeError("Please set GOOGLE_API_KEY_GEMINI environment variable for Gemini access.")
    return ChatGoogleGenerativeAI(
        model=settings.model,
        temperature=settings.temperature,
        max_output_tokens=settings.max_output_tokens,
        google_api_key=settings.api_key,
    )


def _message_text(message: Any) -> Optional[str]:
    """Plain text of an AIMessage; content may be a string or a list of parts."""
    if message is None:
        return None
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return str(content)


class GeminiCompletionClient:
    """
    Completion capability backed by langchain_google_genai.
    Requests structured output shaped like AppSpec and keeps the raw message
    so callers can recover JSON themselves when parsing fails.
    """

    def __init__(self, llm: Any, schema: type = AppSpec):
        self.llm = llm
        self.schema = schema

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiCompletionClient":
        return cls(get_llm(settings))

    def complete(self, instructions: str, text: str, max_output_tokens: int) -> ModelOutput:
        llm = self.llm
        if getattr(llm, "max_output_tokens", max_output_tokens) != max_output_tokens:
            llm = llm.model_copy(update={"max_output_tokens": max_output_tokens})
        structured_callable = llm.with_structured_output(self.schema, method="json_mode", include_raw=True)
        messages = [SystemMessage(content=instructions), HumanMessage(content=text)]
        start_ts = time.time()
        try:
            result = structured_callable.invoke(messages)
        except Exception as e:
            logger.exception("LLM call failed after %.2fs: %s", time.time() - start_ts, e)
            raise UpstreamError(str(e) or e.__class__.__name__, raw_response=_upstream_body(e)) from e
        logger.debug("LLM call finished in %.2fs", time.time() - start_ts)

        if not isinstance(result, dict):
            # some wrappers return the parsed object directly
            return ParsedOutput(result) if result is not None else RawOutput(None)

        parsed = result.get("parsed")
        if parsed is not None:
            if isinstance(parsed, BaseModel):
                parsed = parsed.model_dump()
            return ParsedOutput(parsed)
        if result.get("parsing_error") is not None:
            logger.warning("Structured output parsing failed: %s", result.get("parsing_error"))
        return RawOutput(_message_text(result.get("raw")))


def _upstream_body(exc: Exception) -> Any:
    """Best-effort raw response attached to an upstream exception."""
    response = getattr(exc, "response", None)
    if response is None:
        return None
    for attr in ("text", "content"):
        body = getattr(response, attr, None)
        if isinstance(body, bytes):
            return body.decode("utf-8", errors="replace")
        if isinstance(body, str):
            return body
    return str(response)
