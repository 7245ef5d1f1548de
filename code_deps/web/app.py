"""FastAPI application factory — dependency graph and chat endpoints."""

from __future__ import annotations

import asyncio
import logging
import os

from fastapi import APIRouter, FastAPI, HTTPException
from pydantic import BaseModel

from code_deps import __version__
from code_deps.ai import AIConfig, ContextBuilder, DeepSeekService
from code_deps.analysis.dependency_graph import DependencyAnalyzer
from code_deps.errors import CodeDepsError
from code_deps.models import AnalyzerConfig, Dependency
from code_deps.pipeline import analyze_async
from code_deps.scanner import ProjectScanner

logger = logging.getLogger(__name__)


class FileRequest(BaseModel):
    file_path: str


class AskRequest(BaseModel):
    question: str
    file_path: str | None = None
    max_tokens: int | None = None


def _dependency_dict(dep: Dependency) -> dict:
    return {
        "source": dep.source,
        "target": dep.target,
        "type": dep.type.value,
        "line_numbers": dep.line_numbers,
        "is_external": dep.is_external,
    }


def create_app(config: AnalyzerConfig, ai_config: AIConfig | None = None) -> FastAPI:
    app = FastAPI(title="code-deps", version=__version__)
    router = APIRouter(prefix="/api")

    # One analyzer per app: its cache lives as long as the process
    analyzer = DependencyAnalyzer(config)
    scanner = ProjectScanner(config)

    @router.post("/graph")
    async def build_graph():
        try:
            result = await analyze_async(config, analyzer=analyzer)
        except CodeDepsError as e:
            raise HTTPException(400, str(e))
        except Exception as e:
            logger.exception("[graph] error: %s", e)
            raise HTTPException(500, detail=f"Graph build error: {e}")
        graph = result.graph
        return {
            "nodes": [
                {"path": f.path, "relative_path": f.relative_path, "type": f.type.value}
                for f in graph.nodes.values()
            ],
            "edges": [_dependency_dict(d) for d in graph.iter_edges()],
            "cycles": result.cycles,
        }

    @router.post("/cycles")
    async def cycles():
        try:
            result = await analyze_async(config, analyzer=analyzer)
        except CodeDepsError as e:
            raise HTTPException(400, str(e))
        return {"cycles": result.cycles}

    @router.post("/summary")
    async def summary(req: FileRequest):
        try:
            text = await analyzer.generate_dependency_summary(req.file_path)
        except CodeDepsError as e:
            raise HTTPException(400, str(e))
        except OSError:
            raise HTTPException(404, f"File not found: {req.file_path}")
        return {"file_path": req.file_path, "summary": text}

    @router.post("/dependents")
    async def dependents(req: FileRequest):
        try:
            structure = await scanner.scan_workspace()
        except CodeDepsError as e:
            raise HTTPException(400, str(e))
        try:
            paths = await asyncio.to_thread(
                analyzer.get_file_reverse_dependencies, req.file_path, structure,
            )
        except CodeDepsError as e:
            raise HTTPException(400, str(e))
        return {"file_path": req.file_path, "dependents": paths}

    @router.post("/ai/ask")
    async def ask(req: AskRequest):
        cfg = ai_config or AIConfig()
        if not cfg.api_key:
            raise HTTPException(400, "No API key configured")

        prompt = req.question
        if req.file_path:
            builder = ContextBuilder(scanner, analyzer)
            try:
                context = await builder.create_context_for_file(req.file_path)
            except CodeDepsError as e:
                raise HTTPException(400, str(e))
            except OSError:
                raise HTTPException(404, f"File not found: {req.file_path}")
            prompt = builder.format_context(context, req.question)

        service = DeepSeekService(cfg)
        try:
            answer = await service.get_completion(prompt, req.max_tokens)
        except Exception as e:
            logger.exception("[ask] error: %s", e)
            raise HTTPException(500, detail=f"AI error: {e}")
        finally:
            await service.aclose()
        if not answer:
            logger.info("Empty completion for %s", os.path.basename(req.file_path or "question"))
        return {"answer": answer}

    app.include_router(router)
    return app
