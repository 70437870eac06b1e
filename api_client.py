#talking to the /api/generate backend from the editor
from __future__ import annotations
import os
import json
import requests
from typing import Any, Dict, Optional
API_URL = os.getenv("VISUALMIND_API_URL", "http://localhost:3000").rstrip("/")
REQUEST_TIMEOUT = int(os.getenv("VISUALMIND_API_TIMEOUT", "30"))
class InputError(ValueError):
    pass
class GenerationRequestError(RuntimeError):
    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
def describe_http_error(response: Optional[requests.Response]) -> str:
    if response is None:
        return "Diagram generation failed"
    status = response.status_code
    if status == 429:
        return "Rate limit exceeded, try again in a moment"
    if status == 404:
        return "API endpoint not found, check VISUALMIND_API_URL"
    if status >= 500:
        try:
            detail = response.json().get("error")
        except ValueError:
            detail = None
        return f"Server error: {detail}" if detail else "Server error"
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {status}"
    return data.get("error") or data.get("message") or f"HTTP {status}"
def _raw_body(response: Optional[requests.Response]) -> str:
    if response is None:
        return ""
    try:
        return json.dumps(response.json(), indent=2)
    except ValueError:
        return response.text
def request_diagram(topic: str, api_url: str = API_URL, timeout: int = REQUEST_TIMEOUT) -> Dict[str, Any]:
    topic = (topic or "").strip()
    if not topic:
        raise InputError("Enter a topic first")
    try:
        response = requests.post(
            f"{api_url}/api/generate",
            json={"topic": topic},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.Timeout as e:
        raise GenerationRequestError("Request timed out waiting for the diagram", raw=str(e)) from e
    except requests.HTTPError as e:
        raise GenerationRequestError(describe_http_error(e.response), raw=_raw_body(e.response)) from e
    except requests.RequestException as e:
        raise GenerationRequestError(f"Could not reach the backend: {e}", raw=str(e)) from e
    try:
        return response.json()
    except ValueError as e:
        raise GenerationRequestError("Backend returned an unreadable response", raw=response.text) from e
