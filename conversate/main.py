import logging
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

# Ensure the project root is on sys.path so `from conversate.x import y`
# works regardless of whether uvicorn is started from the project root
# (uvicorn conversate.main:app) or from within the conversate/ directory.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from conversate.config import PATTERNS_PATH  # noqa: E402

app = FastAPI(
    title="Conversate",
    description="Persona-based language practice API",
    version="0.1.0",
)

# CORS middleware: allow frontend dev server origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_class=PlainTextResponse)
async def health_check():
    """Health check endpoint."""
    return "OK"


# Mount route routers: log warnings if any fail to import so
# missing routes are immediately visible in the server logs.
def _mount_routes() -> None:
    try:
        from conversate.routes.personas import router as personas_router
        app.include_router(personas_router)
    except Exception as exc:
        logger.warning("Failed to mount persona routes: %s", exc)

    try:
        from conversate.routes.conversations import router as conversations_router
        app.include_router(conversations_router)
    except Exception as exc:
        logger.warning("Failed to mount conversation routes: %s", exc)

    try:
        from conversate.routes.chat import router as chat_router
        app.include_router(chat_router)
    except Exception as exc:
        logger.warning("Failed to mount chat routes: %s", exc)

    try:
        from conversate.routes.patterns import router as patterns_router
        app.include_router(patterns_router)
    except Exception as exc:
        logger.warning("Failed to mount pattern routes: %s", exc)


def _preload_patterns(path: str) -> int:
    """Load a JSON file of processed patterns into the shared services.

    Returns the number of patterns loaded. A missing or malformed file is
    logged and leaves the personas on their authored templates.
    """
    if not path:
        return 0
    try:
        from conversate.routes.patterns import get_processor, sync_persona_service

        loaded = get_processor().load_patterns(Path(path).read_text(encoding="utf-8"))
        sync_persona_service()
    except Exception as exc:
        logger.warning("Failed to preload patterns from %s: %s", path, exc)
        return 0
    logger.info("Preloaded %d patterns from %s", len(loaded), path)
    return len(loaded)


_mount_routes()
_preload_patterns(PATTERNS_PATH)
