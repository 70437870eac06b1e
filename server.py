#HTTP API: topic in, Mermaid diagram out
from __future__ import annotations
from dotenv import load_dotenv
load_dotenv()
import os
import logging
from datetime import datetime, timezone
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from llm_bridge import DEFAULT_MODEL, UpstreamError, UpstreamTimeout, generate_with_groq
from mermaid_utils import llm_generate_mermaid
SERVICE_NAME = "VisualMind AI"
PORT = int(os.getenv("PORT", "3000"))
APP_ENV = os.getenv("VISUALMIND_ENV", "development")
FRONTEND_DIST = os.getenv(
    "VISUALMIND_STATIC_DIR",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "static"),
)
CORS_ORIGINS = [o.strip() for o in os.getenv("VISUALMIND_CORS_ORIGINS", "*").split(",") if o.strip()]
logger = logging.getLogger(__name__)
class GenerateRequest(BaseModel):
    topic: Optional[str] = None
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
def create_app(production: Optional[bool] = None) -> FastAPI:
    if not os.getenv("GROQ_API_KEY"):
        raise RuntimeError("Missing GROQ_API_KEY in environment or .env")
    if production is None:
        production = APP_ENV == "production"
    app = FastAPI(title=SERVICE_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(err.get("type") == "json_invalid" for err in errors):
            return _error(400, "Request body must be JSON")
        if any("topic" in err.get("loc", ()) for err in errors):
            return _error(400, "Topic must be a string")
        return _error(400, "Invalid request body")
    @app.post("/api/generate")
    def generate(body: Optional[GenerateRequest] = None):
        topic = (body.topic if body else None) or ""
        if not topic.strip():
            return _error(400, "Missing topic")
        try:
            return llm_generate_mermaid(topic, generate=generate_with_groq)
        except UpstreamTimeout as e:
            logger.error('Generation timed out for "%s": %s', topic, e)
            return _error(504, str(e))
        except UpstreamError as e:
            logger.error('Generation failed for "%s": %s', topic, e)
            return _error(502, str(e) or "Unknown error")
        except Exception as e:
            logger.exception('Unexpected failure generating "%s"', topic)
            return _error(500, str(e) or "Unknown error")
    @app.get("/api/health")
    def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "model": DEFAULT_MODEL,
            "service": SERVICE_NAME,
        }
    # must come after the API routes so it does not shadow them
    if production:
        if os.path.isdir(FRONTEND_DIST):
            app.mount("/", StaticFiles(directory=FRONTEND_DIST, html=True), name="frontend")
        else:
            logger.warning("Production mode but no static build at %s", FRONTEND_DIST)
    return app
def main():
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    logger.info("%s backend listening at http://localhost:%d", SERVICE_NAME, PORT)
    logger.info("Using Groq API with %s model", DEFAULT_MODEL)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
if __name__ == "__main__":
    main()
