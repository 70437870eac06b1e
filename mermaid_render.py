#Rendering normalized Mermaid code to SVG/PNG with mermaid-cli (mmdc)
from __future__ import annotations
import os
import re
import asyncio
import logging
import tempfile
from typing import Tuple
MMDC_BIN = os.getenv("MMDC_BIN", "mmdc")
MERMAID_THEME = os.getenv("MERMAID_THEME", "dark")
RENDER_TIMEOUT = float(os.getenv("MMDC_TIMEOUT", "30"))
logger = logging.getLogger(__name__)
class RenderError(RuntimeError):
    pass
def export_filename(topic: str) -> str:
    stem = re.sub(r"[^a-zA-Z0-9]", "_", (topic or "").strip())
    return f"{stem or 'neural_diagram'}.png"
async def _run_mmdc(code: str, suffix: str, background: str, render_id: str) -> bytes:
    if not code or not code.strip():
        raise ValueError("Empty Mermaid code passed to renderer")
    with tempfile.TemporaryDirectory(prefix=f"{render_id}-") as tmp:
        src_path = os.path.join(tmp, "diagram.mmd")
        out_path = os.path.join(tmp, f"diagram{suffix}")
        with open(src_path, "w", encoding="utf-8") as f:
            f.write(code)
        try:
            proc = await asyncio.create_subprocess_exec(
                MMDC_BIN,
                "-i", src_path,
                "-o", out_path,
                "-t", MERMAID_THEME,
                "-b", background,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise RenderError(f"Mermaid CLI not found: {MMDC_BIN}") from e
        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=RENDER_TIMEOUT)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise RenderError(f"Mermaid rendering timed out after {RENDER_TIMEOUT:g}s") from e
        if proc.returncode != 0 or not os.path.exists(out_path):
            reason = stderr.decode("utf-8", "replace").strip() or f"mmdc exited with {proc.returncode}"
            logger.warning("Render %s rejected: %s", render_id, reason.splitlines()[-1])
            raise RenderError(reason)
        with open(out_path, "rb") as f:
            return f.read()
async def render_mermaid_to_svg(code: str, render_id: str = "vm-diagram") -> str:
    data = await _run_mmdc(code, ".svg", "transparent", render_id)
    return data.decode("utf-8")
async def export_png(code: str, topic: str = "") -> Tuple[str, bytes]:
    data = await _run_mmdc(code, ".png", "black", "vm-export")
    return export_filename(topic), data
