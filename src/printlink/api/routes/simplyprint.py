"""SimplyPrint catalog lookups, suggestions and filename validation."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from printlink.api.dependencies import get_services
from printlink.api.schemas import ValidateFilesRequest
from printlink.services import Services

router = APIRouter(tags=["simplyprint"])


@router.get("/files")
def list_files(search: str = "", services: Services = Depends(get_services)) -> dict:
    files = services.catalog.search(search.strip())
    return {
        "files": [
            {"id": f.id, "name": f.name, "ext": f.ext, "type": f.type, "fullName": f.full_name}
            for f in files
        ]
    }


@router.get("/suggest")
def suggest_files(query: str = "", services: Services = Depends(get_services)) -> dict:
    candidates = services.suggestions.suggest(query.strip())
    return {
        "files": [
            {"id": c.id, "name": c.name, "ext": c.extension, "fullName": c.full_name,
             "score": c.score}
            for c in candidates
        ]
    }


@router.get("/queue-groups")
def list_queue_groups(services: Services = Depends(get_services)) -> dict:
    return {"groups": [g.model_dump() for g in services.catalog.list_groups()]}


@router.post("/validate")
def validate_files(body: ValidateFilesRequest, services: Services = Depends(get_services)) -> dict:
    checks = services.print_queue.check_files(body.file_names, dry_run=body.dry_run,
                                              quantity=body.quantity)
    return {
        "dryRun": body.dry_run,
        "files": [
            {"fileName": c.file_name, "resolvable": c.resolvable, "fileId": c.file_id,
             "queued": c.queued, "error": c.error or None}
            for c in checks
        ],
    }
