#Groq chat completion used to draft the diagram text
from __future__ import annotations
import os
import logging
import groq
from groq import Groq
from typing import Any, List, Optional, Union
DEFAULT_MODEL = os.getenv("GROQ_MODEL", "deepseek-r1-distill-llama-70b")
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 1000
REQUEST_TIMEOUT = float(os.getenv("GROQ_TIMEOUT", "30"))
logger = logging.getLogger(__name__)
class UpstreamError(RuntimeError):
    pass
class UpstreamTimeout(UpstreamError):
    pass
def _extract_text(content: Union[str, List, None]) -> str:
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        pieces = []
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text":
                pieces.append(block.get("text", "").strip())
        return "\n".join(pieces).strip()
    return ""
def _error_message(err: groq.APIStatusError) -> str:
    body: Any = err.body
    if isinstance(body, dict):
        detail = body.get("error", body)
        if isinstance(detail, dict) and detail.get("message"):
            return str(detail["message"])
    return err.message or f"Groq returned HTTP {err.status_code}"
def generate_with_groq(
    system_text: str,
    user_text: str,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: float = REQUEST_TIMEOUT,
    api_key: Optional[str] = None,
) -> str:
    api_key = api_key or os.getenv("GROQ_API_KEY")
    if not api_key:
        raise RuntimeError("GROQ_API_KEY is not set.")
    # no retries: failures go straight back to the caller
    client = Groq(api_key=api_key, timeout=timeout, max_retries=0)
    messages = [
        {"role": "system", "content": system_text},
        {"role": "user", "content": user_text},
    ]
    try:
        chat_completion = client.chat.completions.create(
            messages=messages,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
        )
    except groq.APITimeoutError as e:
        logger.warning("Groq request timed out after %ss", timeout)
        raise UpstreamTimeout(f"Groq request timed out after {timeout:g}s") from e
    except groq.APIStatusError as e:
        logger.error("Groq API error %s: %s", e.status_code, e.message)
        raise UpstreamError(_error_message(e)) from e
    except groq.APIConnectionError as e:
        logger.error("Groq connection error: %s", e)
        raise UpstreamError(f"Could not reach Groq: {e}") from e
    except groq.APIError as e:
        logger.error("Groq returned an unusable response: %s", e.message)
        raise UpstreamError(e.message or "Groq returned an unusable response") from e
    if (
        not chat_completion or
        not chat_completion.choices or
        not chat_completion.choices[0].message
    ):
        return ""
    return _extract_text(chat_completion.choices[0].message.content)
