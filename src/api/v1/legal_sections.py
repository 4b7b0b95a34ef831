"""Statute knowledge base endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Request

from src.services.knowledge_base import KnowledgeBase

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/legal-sections", tags=["legal-sections"])


def _get_knowledge_base(request: Request) -> KnowledgeBase:
    kb = getattr(request.app.state, "knowledge_base", None)
    if kb is None:
        raise HTTPException(status_code=503, detail="Knowledge base not loaded")
    return kb


@router.get("")
async def list_legal_sections(request: Request) -> dict:
    """Return the statute knowledge base exactly as loaded."""
    kb = _get_knowledge_base(request)
    return {"success": True, "data": kb.to_dict()}


@router.get("/{act_id}/{section_id}")
async def get_legal_section(act_id: str, section_id: str, request: Request) -> dict:
    kb = _get_knowledge_base(request)
    act = kb.acts.get(act_id)
    section = kb.get_section(act_id, section_id)
    if act is None or section is None:
        raise HTTPException(
            status_code=404, detail=f"Section {act_id}.{section_id} not found"
        )

    return {
        "act_id": act.act_id,
        "act": act.name,
        "section": section.section_id,
        "title": section.title,
        "description": section.description,
        "keywords": list(section.keywords),
        "severity": kb.severity_of(section.reference),
    }
