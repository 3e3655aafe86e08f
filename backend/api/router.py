import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_batch_analyzer, get_object_store
from config import settings
from models.requests import AnalyzeProfilesRequest
from models.responses import (
    AnalyzeProfilesResponse,
    ProfileListResponse,
    UploadedProfile,
    UploadResponse,
)
from services.batch_analyzer import BatchAnalyzer, BatchInputError
from services.object_store import ObjectStore, ObjectStoreError, generate_profile_name

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)
logger = logging.getLogger(__name__)


def _is_pdf_upload(upload: UploadFile) -> bool:
    filename = (upload.filename or "").lower()
    return filename.endswith(".pdf") or upload.content_type == "application/pdf"


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "storage_backend": settings.storage_backend,
    }


@router.post("/profiles", response_model=UploadResponse)
async def upload_profiles(
    profiles: list[UploadFile] = File(...),
    store: ObjectStore = Depends(get_object_store),
):
    if len(profiles) > settings.max_upload_files:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files. Max files per upload: {settings.max_upload_files}",
        )

    # Validate every file before storing any of them
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    payloads = []
    for upload in profiles:
        if not _is_pdf_upload(upload):
            raise HTTPException(status_code=400, detail="Only PDF files are accepted")
        content = await upload.read()
        if len(content) > max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
            )
        payloads.append((upload.filename or "", content))

    uploaded = []
    for original_name, content in payloads:
        try:
            stored_name = await store.put(generate_profile_name(), content)
        except ObjectStoreError as e:
            logger.error("Failed to upload %s: %s", original_name, e)
            continue
        uploaded.append(UploadedProfile(filename=stored_name, original_name=original_name, size=len(content)))

    if not uploaded:
        raise HTTPException(status_code=500, detail="All file uploads failed")

    return UploadResponse(
        message=f"{len(uploaded)} profile(s) uploaded successfully",
        files=uploaded,
        total_uploaded=len(uploaded),
        total_attempted=len(payloads),
    )


@router.get("/profiles", response_model=ProfileListResponse)
async def list_profiles(store: ObjectStore = Depends(get_object_store)):
    try:
        profiles = await store.list_profiles()
    except ObjectStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ProfileListResponse(profiles=profiles)


@router.delete("/profiles/{filename}")
async def delete_profile(filename: str, store: ObjectStore = Depends(get_object_store)):
    try:
        deleted = await store.delete(filename)
    except ObjectStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"message": "Profile deleted successfully"}


@router.post("/analyze-profiles", response_model=AnalyzeProfilesResponse)
@limiter.limit("10/minute")
async def analyze_profiles(
    request: Request,
    body: AnalyzeProfilesRequest,
    analyzer: BatchAnalyzer = Depends(get_batch_analyzer),
):
    try:
        result = await analyzer.analyze_store(body.job_description)
    except BatchInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ObjectStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return AnalyzeProfilesResponse(
        job_description=body.job_description,
        candidates=result,
        analyzed_at=datetime.now(timezone.utc),
    )
