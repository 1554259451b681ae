"""
Generation routes - request, inspect and reset the media generation job
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..core import GenerationBusyError
from ..models import (
    GenerationJobConfig,
    GenerationStatusResponse,
    ImageGenerationRequest,
    VideoGenerationRequest,
)
from ..services.container import Studio
from ..services.generation import GenerationSnapshot
from .dependencies import get_studio

router = APIRouter(prefix="/generation", tags=["generation"])


def _status_response(snapshot: GenerationSnapshot) -> GenerationStatusResponse:
    return GenerationStatusResponse(**snapshot.to_dict())


def _start(studio: Studio, config: GenerationJobConfig, background_tasks: BackgroundTasks) -> GenerationStatusResponse:
    try:
        job = studio.generation.start(config)
    except GenerationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    # Auth check, submit and polling continue after the response is sent
    background_tasks.add_task(studio.generation.run, job)
    return _status_response(job.snapshot)


@router.post("/video", response_model=GenerationStatusResponse, status_code=202)
async def generate_video(
    request: VideoGenerationRequest,
    background_tasks: BackgroundTasks,
    studio: Studio = Depends(get_studio),
):
    """Render the newest script (or an explicit prompt) with Veo"""
    try:
        config = studio.generation.build_video_config(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _start(studio, config, background_tasks)


@router.post("/image", response_model=GenerationStatusResponse, status_code=202)
async def generate_image(
    request: ImageGenerationRequest,
    background_tasks: BackgroundTasks,
    studio: Studio = Depends(get_studio),
):
    """Generate an image, or edit the reference image when one is given"""
    try:
        config = studio.generation.build_image_config(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _start(studio, config, background_tasks)


@router.get("/status", response_model=GenerationStatusResponse)
async def get_status(studio: Studio = Depends(get_studio)):
    return _status_response(studio.orchestrator.snapshot())


@router.post("/reset", response_model=GenerationStatusResponse)
async def reset_generation(studio: Studio = Depends(get_studio)):
    """Back to idle; an in-flight remote job is abandoned, not cancelled"""
    return _status_response(studio.orchestrator.reset())
