"""
Mind Map Backend - FastAPI Application

It provides:
- REST API for mind-map operations (add, move, list nodes)
- DOT and SVG export endpoints, plus saving the SVG to disk
- Validation and summary endpoints

Each app owns one MindMap. Every handler that touches it holds the app's
lock, so an insertion is never observed half-applied.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..config import Settings
from ..core import (
    AddNodeRequest, MoveNodeRequest, SaveSvgRequest,
    MindMap, NodeNotFoundError,
    to_dot, to_svg, save_svg,
    validate_mindmap, validation_summary, summarize_mindmap,
)


logger = logging.getLogger(__name__)


def create_app(mindmap: Optional[MindMap] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API around a mind map.

    Args:
        mindmap: Map to serve (a fresh one from settings.root_text if None)
        settings: Runtime settings (from the environment if None)
    """
    settings = settings or Settings.from_env()
    mindmap = mindmap if mindmap is not None else MindMap(settings.root_text)
    lock = asyncio.Lock()

    app = FastAPI(
        title="Mind Map API",
        description="Backend API for the radial mind-map tool",
        version="1.0.0",
    )
    app.state.mindmap = mindmap
    app.state.settings = settings

    # CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """422 without echoing inputs, which may hold floats JSON cannot encode (inf, nan)."""
        errors = [
            {k: v for k, v in error.items() if k not in ("input", "ctx")}
            for error in exc.errors()
        ]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    # --- Health Check ---

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "nodes": mindmap.node_count}

    # --- Nodes ---

    @app.get("/api/nodes")
    async def list_nodes():
        """List every node."""
        async with lock:
            nodes = mindmap.list_all()
        return {"nodes": [n.model_dump() for n in nodes]}

    @app.get("/api/nodes/{node_id}")
    async def get_node(node_id: int):
        """Get a single node."""
        async with lock:
            try:
                node = mindmap.get_node(node_id)
            except NodeNotFoundError as e:
                raise HTTPException(status_code=404, detail=str(e))
        return node.model_dump()

    @app.post("/api/nodes")
    async def add_node(request: AddNodeRequest):
        """Attach a new node under an existing parent."""
        async with lock:
            try:
                new_id = mindmap.add_node(request.parent_id, request.text)
            except NodeNotFoundError as e:
                logger.warning("Rejected add under missing parent %d", request.parent_id)
                raise HTTPException(status_code=404, detail=str(e))
            node = mindmap.get_node(new_id)
        return {"success": True, "node": node.model_dump()}

    @app.post("/api/nodes/{node_id}/move")
    async def move_node(node_id: int, request: MoveNodeRequest):
        """Nudge a node by a relative offset."""
        async with lock:
            try:
                mindmap.nudge(node_id, request.dx, request.dy)
            except NodeNotFoundError as e:
                logger.warning("Rejected move of missing node %d", node_id)
                raise HTTPException(status_code=404, detail=str(e))
            node = mindmap.get_node(node_id)
        return {"success": True, "node": node.model_dump()}

    # --- Export ---

    @app.get("/api/export/dot", response_class=PlainTextResponse)
    async def export_dot():
        """Export the map as Graphviz DOT."""
        async with lock:
            return to_dot(mindmap)

    @app.get("/api/export/svg")
    async def export_svg(fit: bool = Query(False)):
        """Export the map as an SVG document."""
        async with lock:
            document = to_svg(mindmap, fit_to_content=fit)
        return Response(content=document, media_type="image/svg+xml")

    @app.post("/api/export/svg")
    async def save_svg_file(request: SaveSvgRequest):
        """Write the SVG document to disk."""
        path = Path(request.file_path or settings.svg_path)
        async with lock:
            try:
                saved = save_svg(mindmap, path, fit_to_content=request.fit_to_content)
            except OSError as e:
                raise HTTPException(status_code=500, detail=f"Failed to save: {e}")
        return {"success": True, "file_path": str(saved)}

    # --- Analysis ---

    @app.get("/api/validate")
    async def validate():
        """Check the map's structural invariants."""
        async with lock:
            issues = validate_mindmap(mindmap)
        return {
            "success": True,
            "issues": [issue.to_dict() for issue in issues],
            "summary": validation_summary(issues)
        }

    @app.get("/api/summary")
    async def summary():
        """Summarize the map's structure."""
        async with lock:
            result = summarize_mindmap(mindmap)
        return {"success": True, "summary": result.to_dict()}

    return app


def run(mindmap: Optional[MindMap] = None, settings: Optional[Settings] = None):
    """Serve the API with uvicorn."""
    import uvicorn

    settings = settings or Settings.from_env()
    app = create_app(mindmap, settings)
    logger.info("Serving mind map API on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
