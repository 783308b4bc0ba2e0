"""
Router for mock video generation endpoints.
Handles job submission and job status polling.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from config import MIN_PROMPT_LENGTH
from database import get_store
from models import JobStatus
from schemas import GenerationRequest, JobResponse, StatusResponse
from services import JobNotFoundError, JobStore
from tasks import JobRunner, get_runner


# Create the router
router = APIRouter(prefix="/api", tags=["generation"])


@router.post("/generate", response_model=JobResponse)
async def submit_generation(
    request: Optional[GenerationRequest] = Body(None),
    store: JobStore = Depends(get_store),
    runner: JobRunner = Depends(get_runner),
):
    """
    Creates a queued job record, hands it to the worker pool
    and immediately returns the job ID.
    """
    request = request or GenerationRequest()
    if len(request.prompt) < MIN_PROMPT_LENGTH:
        raise HTTPException(status_code=400, detail="Prompt too short")

    job = store.create(
        prompt=request.prompt,
        duration=request.duration,
        aspect_ratio=request.aspect_ratio,
        seed=request.seed,
    )

    try:
        runner.submit(job.id)
    except Exception as e:
        logging.error(f"Failed to submit job {job.id} to the worker pool: {e}")
        store.set_status(job.id, JobStatus.FAILED, error="Failed to start the video generation job.")
        raise HTTPException(status_code=500, detail="Failed to start the video generation job.")

    logging.info(f"✨ Job {job.id} submitted for prompt: '{request.prompt}'")
    return JobResponse(job_id=job.id, status=JobStatus.QUEUED.value)


@router.get("/generate", response_model=StatusResponse, response_model_exclude_none=True)
async def get_generation_status(
    job_id: Optional[str] = Query(None, alias="jobId"),
    store: JobStore = Depends(get_store),
):
    """
    Returns the current snapshot of a job.
    """
    if not job_id:
        raise HTTPException(status_code=400, detail="Missing jobId")

    job = store.get(job_id)
    if not job:
        raise JobNotFoundError(job_id)

    return StatusResponse(status=job.status, url=job.video_url, error=job.error)
