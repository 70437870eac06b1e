#Pulling Mermaid code out of LLM output, repairing it, and falling back when the model gives us nothing usable
from __future__ import annotations
import os
import re
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
from llm_bridge import generate_with_groq
from prompt_builder import build_prompts
from topic_classifier import categorize
MIN_DIAGRAM_LENGTH = int(os.getenv("VISUALMIND_MIN_DIAGRAM_LENGTH", "50"))
DEFAULT_HEADER = "graph TD;"
DIRECTIONS = r"(?:TD|TB|BT|RL|LR)"
logger = logging.getLogger(__name__)
_FENCE_RE = re.compile(r"```mermaid\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
# greedy on purpose: everything after the directive is taken as diagram body
_GRAPH_RE = re.compile(rf"(graph\s+{DIRECTIONS}.*)", re.DOTALL | re.IGNORECASE)
_FLOWCHART_RE = re.compile(rf"flowchart\s+{DIRECTIONS}.*", re.DOTALL | re.IGNORECASE)
_DIRECTIVE_RE = re.compile(
    r"^(?:graph|flowchart|sequenceDiagram|classDiagram|gitGraph|pie|journey)\b",
    re.IGNORECASE,
)
_HEADER_RE = re.compile(
    rf"^((?:graph|flowchart)[ \t]+{DIRECTIONS})\b[ \t]*;?[ \t]*\n*",
    re.IGNORECASE,
)
_LABEL_RE = re.compile(r"\[([^\[\]\n]*)\]")
_UNSAFE_LABEL_CHARS = (":", "°", "(")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")
_SEMICOLON_RUN_RE = re.compile(r";(?:[ \t]*;)+")
def extract_mermaid_block(response_text: str) -> str:
    if not isinstance(response_text, str):
        return ""
    match = _FENCE_RE.search(response_text)
    if match:
        return match.group(1).strip()
    match = _GRAPH_RE.search(response_text)
    if match:
        return match.group(1).strip()
    match = _FLOWCHART_RE.search(response_text)
    if match:
        return match.group(0).strip()
    return ""
def fallback_diagram(topic: str) -> str:
    topic = topic or ""
    clean_topic = topic[:1].upper() + topic[1:]
    topic_lower = topic.lower()
    if "cooking" in topic_lower or "pizza" in topic_lower:
        steps = [
            "Gather Ingredients",
            "Prepare Workspace",
            "Follow Recipe Steps",
            "Cook/Bake",
            "Check Quality",
            "Serve & Enjoy",
        ]
    elif "marketing" in topic_lower:
        steps = [
            "Market Research",
            "Define Target Audience",
            "Create Strategy",
            "Execute Campaigns",
            "Measure Results",
            "Optimize & Improve",
        ]
    else:
        steps = [
            "Understanding Basics",
            "Key Components",
            "Implementation",
            "Best Practices",
            "Advanced Techniques",
            "Continuous Improvement",
        ]
    ids = "ABCDEFG"
    lines = [DEFAULT_HEADER, f"    A[{clean_topic}] --> B[{steps[0]}];"]
    for i in range(1, len(steps)):
        lines.append(f"    {ids[i]} --> {ids[i + 1]}[{steps[i]}];")
    return "\n".join(lines)
def _quote_label(match: re.Match) -> str:
    inner = match.group(1).strip()
    if len(inner) >= 2 and inner.startswith('"') and inner.endswith('"'):
        return match.group(0)
    if not any(ch in inner for ch in _UNSAFE_LABEL_CHARS):
        return match.group(0)
    inner = inner.replace('"', "#quot;")
    return f'["{inner}"]'
def normalize_mermaid(code: Optional[str]) -> str:
    if not isinstance(code, str):
        return ""
    code = code.strip()
    # blank source means "nothing to draw", not an empty graph
    if not code:
        return ""
    if not _DIRECTIVE_RE.match(code):
        code = f"{DEFAULT_HEADER}\n{code}"
    code = _HEADER_RE.sub(r"\1;\n", code, count=1)
    code = _LABEL_RE.sub(_quote_label, code)
    code = _BLANK_LINES_RE.sub("\n", code)
    code = _SEMICOLON_RUN_RE.sub(";", code)
    return code.strip()
def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
def llm_generate_mermaid(
    topic: str,
    generate: Callable[[str, str], str] = generate_with_groq,
    min_length: Optional[int] = None,
) -> Dict[str, Any]:
    min_length = MIN_DIAGRAM_LENGTH if min_length is None else min_length
    category = categorize(topic)
    prompts = build_prompts(topic, category)
    logger.info('Generating diagram for: "%s"', topic)
    logger.info("Detected category: %s", category or "general")
    raw_response = generate(prompts.system, prompts.user)
    mermaid = extract_mermaid_block(raw_response)
    if not mermaid or len(mermaid) < min_length:
        logger.info('Creating fallback diagram for "%s" (extracted %d chars)', topic, len(mermaid))
        mermaid = fallback_diagram(topic)
    logger.info('Generated diagram for "%s" (%d chars)', topic, len(mermaid))
    logger.debug("First lines:\n%s", "\n".join(mermaid.split("\n")[:3]))
    return {
        "raw": raw_response,
        "mermaid": mermaid,
        "topic": topic,
        "category": category,
        "timestamp": _timestamp(),
    }
