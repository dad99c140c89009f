"""FastAPI routes for the mocked proctoring vision service."""
from __future__ import annotations

from fastapi import APIRouter

from api.errors import bad_request
from api.schemas import EventReq, OkResp, VerifyResp, VisionReq
from observability import log_event
from services.proctoring import record_event, save_reference, verify_frame


router = APIRouter(prefix="/api/vision")


def _require_image(req: VisionReq) -> tuple[str, str]:
    if not req.sessionId or not req.imageBase64:
        raise bad_request("sessionId and imageBase64 are required")
    return req.sessionId, req.imageBase64


@router.post("/reference", response_model=OkResp)
def reference(req: VisionReq) -> OkResp:
    session_id, image = _require_image(req)
    save_reference(session_id, image)
    log_event("vision_reference", session_id)
    return OkResp(ok=True)


@router.post("/verify", response_model=VerifyResp)
def verify(req: VisionReq) -> VerifyResp:
    session_id, image = _require_image(req)
    result = verify_frame(session_id, image)
    return VerifyResp(**result.model_dump())


@router.post("/event", response_model=OkResp)
def event(req: EventReq) -> OkResp:
    if not req.sessionId or not req.type:
        raise bad_request("sessionId and type are required")
    recorded = record_event(req.sessionId, req.type, severity=req.severity or "info", payload=req.payload)
    log_event("proctor_event", req.sessionId, type=recorded.type, severity=recorded.severity)
    return OkResp(ok=True)
