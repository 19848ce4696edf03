"""
Compiler REST routes.

All routes are mounted under /api by main.py.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..compiler import compile_graph
from ..config import CompilerSettings
from ..errors import CompileError
from ..library import default_library
from ..serialization.deserialiser import load_document
from ..serialization.schema import SchemaError, validate

logger = logging.getLogger(__name__)

router = APIRouter()

library = default_library()


# ── GET /library ──────────────────────────────────────────────────────────────

@router.get("/library")
async def get_library() -> Dict[str, List[Dict[str, Any]]]:
    return library.describe()


# ── POST /compile ─────────────────────────────────────────────────────────────

class CompileBody(BaseModel):
    graph: Dict[str, Any]
    strict: bool = False


@router.post("/compile")
async def compile_module(body: CompileBody) -> Any:
    try:
        validate(body.graph, library, strict=body.strict)
    except SchemaError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    graph, module = load_document(body.graph)
    try:
        code = compile_graph(graph, library, module, CompilerSettings.from_env())
    except CompileError as exc:
        logger.info("compile of %s failed: %s", module.class_name, exc)
        return JSONResponse(status_code=422, content=exc.to_dict())

    return {"module": module.to_dict(), "code": code}
