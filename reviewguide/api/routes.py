"""HTTP endpoints for checking documents and listing rules."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from reviewguide.config.project import ProjectConfig
from reviewguide.config.settings import settings
from reviewguide.models.outputs import DocumentReport, Severity
from reviewguide.rules import registry
from reviewguide.services.checker import DocumentChecker
from reviewguide.services.toc import update_toc

logger = logging.getLogger(__name__)
router = APIRouter(tags=["documents"])


class CheckRequest(BaseModel):
    """A Markdown document submitted for checking."""

    content: str
    path: str = Field(default="document.md", description="Name used in findings")
    ignore: list[str] = Field(default_factory=list, description="Rule ids or names to ignore")


class TocRequest(BaseModel):
    content: str
    level: int = Field(default=2, ge=1, le=6)
    max_level: int | None = Field(default=None, ge=1, le=6)


class TocResponse(BaseModel):
    content: str
    changed: bool


class RuleInfo(BaseModel):
    id: str
    name: str
    summary: str
    default_severity: Severity


def _enforce_size(content: str) -> None:
    size = len(content.encode("utf-8"))
    if size > settings.max_document_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Document is {size} bytes, limit is {settings.max_document_bytes}",
        )


@router.get("/rules")
async def list_rules() -> list[RuleInfo]:
    """Return every registered rule."""
    return [
        RuleInfo(
            id=rule.id,
            name=rule.name,
            summary=rule.summary,
            default_severity=rule.default_severity,
        )
        for rule in registry
    ]


@router.get("/rules/{rule_key}")
async def get_rule(rule_key: str) -> RuleInfo:
    """Return a single rule by id or name."""
    rule = registry.get(rule_key)
    if rule is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown rule: {rule_key}"
        )
    return RuleInfo(
        id=rule.id,
        name=rule.name,
        summary=rule.summary,
        default_severity=rule.default_severity,
    )


@router.post("/check")
async def check_document(request: CheckRequest) -> DocumentReport:
    """Check a submitted Markdown document.

    Relative file links are not resolved because the document has no
    location on disk.
    """
    _enforce_size(request.content)

    checker = DocumentChecker(ProjectConfig(ignore=request.ignore))
    report = checker.check_text(request.content, path=request.path)
    logger.info(
        f"Checked {request.path}: {report.count('error')} errors, "
        f"{report.count('warning')} warnings"
    )
    return report


@router.post("/toc")
async def regenerate_toc(request: TocRequest) -> TocResponse:
    """Return the document with its table of contents regenerated."""
    _enforce_size(request.content)
    try:
        content = update_toc(
            request.content,
            level=request.level,
            max_level=request.max_level,
            toc_titles=settings.toc_titles,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return TocResponse(content=content, changed=content != request.content)
