"""FastAPI router for the video upload endpoints.

``POST /avvia`` and ``POST /upload`` are the same handler: clients built
against either path keep working.

Form fields:
    video        the video file (required)
    descrizione  the user's goal, forwarded to the prompt (optional)

Query:
    mode         plan | analysis | transcription (default from settings)

This handler is the single place where failures become HTTP responses:
    400  no file uploaded, or an empty file
    413  upload above pipeline.max_upload_mb
    503  no AI provider configured
    500  anything else (ffmpeg, no frames, provider call failures)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse

from operator24.ai_provider.errors import AIProviderError
from operator24.config import PipelineMode
from operator24.media import EmptyUploadError, UploadTooLargeError

from .schemas import (
    DETAIL_LIMIT,
    FAILURE_MESSAGE,
    NO_FILE_MESSAGE,
    ErrorResponse,
)
from .service import VideoAnalysisService, get_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


def _error(status_code: int, message: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(messaggio=message, dettaglio=detail)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


@router.post("/avvia")
@router.post("/upload")
async def analyze_video(
    video: Optional[UploadFile] = File(None),
    descrizione: Optional[str] = Form(None),
    mode: Optional[PipelineMode] = Query(None),
    service: VideoAnalysisService = Depends(get_analysis_service),
):
    """Analyze an uploaded video with the selected pipeline.

    Returns:
        JSON with messaggio/stato plus the pipeline fields
        (summary + plan, analisi, or trascrizione + analisi).
    """
    if video is None or not video.filename:
        logger.warning("Upload rejected: no file received")
        return _error(400, NO_FILE_MESSAGE)

    try:
        result = await service.run(video, description=descrizione, mode=mode)
    except EmptyUploadError as e:
        logger.warning(f"Upload rejected: {e}")
        return _error(400, NO_FILE_MESSAGE)
    except UploadTooLargeError as e:
        logger.warning(f"Upload rejected: {e}")
        return _error(413, str(e))
    except AIProviderError as e:
        logger.error(f"Video analysis failed: {e.message}")
        return _error(e.status_code, FAILURE_MESSAGE, e.message[:DETAIL_LIMIT])
    except Exception as e:
        logger.exception("Video analysis failed")
        return _error(500, FAILURE_MESSAGE, str(e)[:DETAIL_LIMIT])
    finally:
        await video.close()

    return result.to_payload()
