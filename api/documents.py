"""FastAPI routes for document upload and domain listing."""
from __future__ import annotations

from fastapi import APIRouter

from api.errors import bad_request, internal_error
from api.schemas import ChunkOut, ChunksResp, DomainsResp, UploadReq, UploadResp
from observability import log_event
from rag import DocumentStore


router = APIRouter(prefix="/api/rag")


@router.post("/upload", response_model=UploadResp)
def upload(req: UploadReq) -> UploadResp:
    domain_id = (req.domainId or "").strip()
    if not domain_id or not req.text:
        raise bad_request("domainId and text are required")
    try:
        added, total = DocumentStore().append_text(domain_id, req.text)
    except Exception as exc:  # noqa: BLE001
        raise internal_error("Failed to store document", exc) from exc
    log_event("rag_upload", "-", domain=domain_id, added=added, total=total)
    return UploadResp(ok=True, added=added, total=total)


@router.get("/chunks/{domain_id}", response_model=ChunksResp)
def chunks(domain_id: str) -> ChunksResp:
    stored = DocumentStore().load_chunks(domain_id)
    return ChunksResp(
        domainId=domain_id,
        total=len(stored),
        chunks=[ChunkOut(id=chunk.id, text=chunk.text) for chunk in stored],
    )


@router.get("/domains", response_model=DomainsResp)
def domains() -> DomainsResp:
    return DomainsResp(domains=DocumentStore().domains())


@router.get("/domains-fs", response_model=DomainsResp)
def domains_fs() -> DomainsResp:
    return DomainsResp(domains=DocumentStore().filesystem_domains())
