"""Video analysis pipelines.

Each request runs exactly one pipeline inside its own RequestWorkspace:

    plan           downscale -> frames -> vision completion (JSON) -> summary + plan
    analysis       downscale -> frames -> vision completion (text) -> analisi
    transcription  audio track (or raw upload) -> transcription -> [chat completion]

ffmpeg runs as an async subprocess; the blocking SDK calls are pushed to
the threadpool.
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from operator24.ai_provider.base import FrameImage
from operator24.ai_provider.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    PLAN_SYSTEM_PROMPT,
    TRANSCRIPT_SYSTEM_PROMPT,
    UNSTRUCTURED_SUMMARY,
    get_analysis_prompt,
    get_plan_prompt,
    get_transcript_prompt,
)
from operator24.ai_provider.wrapper import (
    call_completion,
    call_transcription,
    call_vision,
    get_active_provider,
)
from operator24.config import Operator24Config, PipelineMode, get_config
from operator24.media import (
    MediaProcessingError,
    RequestWorkspace,
    downscale_video,
    extract_audio,
    extract_frames,
)

from .schemas import (
    ActionStep,
    AnalysisResponse,
    FrameAnalysisResponse,
    PlanResponse,
    TranscriptionResponse,
)

logger = logging.getLogger(__name__)

NO_FRAMES_MESSAGE = "Impossibile estrarre fotogrammi dal video."


def parse_plan(raw: Optional[str]) -> Tuple[str, List[ActionStep]]:
    """Parse the model's JSON answer into ``(summary, plan)``.

    Anything that is not a JSON object falls back to the unstructured
    summary with an empty plan. A missing summary becomes "", a non-list
    plan becomes [] and non-object plan entries are dropped. Step values
    are relayed as the model wrote them.
    """
    try:
        data: Any = json.loads(raw or "{}")
    except json.JSONDecodeError:
        logger.warning("Model answer is not valid JSON, using fallback plan")
        return UNSTRUCTURED_SUMMARY, []

    if not isinstance(data, dict):
        logger.warning("Model answer is JSON but not an object, using fallback plan")
        return UNSTRUCTURED_SUMMARY, []

    summary = data.get("summary") or ""
    if not isinstance(summary, str):
        summary = str(summary)

    plan = data.get("plan")
    if not isinstance(plan, list):
        plan = []

    steps: List[ActionStep] = []
    for step in plan:
        if not isinstance(step, dict):
            continue
        steps.append(ActionStep.model_validate(step))
    return summary, steps


class VideoAnalysisService:
    """Runs the pipeline selected by ``mode`` for one uploaded video.

    Args:
        config: Application configuration (media, AI and pipeline sections).
    """

    def __init__(self, config: Operator24Config) -> None:
        self.config = config

    async def run(
        self,
        upload: UploadFile,
        description: Optional[str] = None,
        mode: Optional[PipelineMode] = None,
    ) -> AnalysisResponse:
        """Save the upload, run the pipeline and return its response model.

        Raises:
            ProviderNotAvailableError: No provider configured (checked first).
            UploadTooLargeError: Upload above ``pipeline.max_upload_mb``.
            EmptyUploadError: The uploaded file has no bytes.
            MediaProcessingError: ffmpeg failed or produced no frames.
            ProviderCallError: The hosted API call failed.
        """
        mode = mode or self.config.pipeline.default_mode
        # Fail fast before transcoding anything
        get_active_provider()

        async with RequestWorkspace(self.config.media.work_dir) as workspace:
            source = await workspace.save_upload(
                upload, self.config.pipeline.max_upload_bytes
            )
            logger.info(f"Running '{mode}' pipeline for {upload.filename}")

            if mode == "plan":
                return await self._run_plan(workspace, source, description)
            if mode == "analysis":
                return await self._run_analysis(workspace, source, description)
            return await self._run_transcription(workspace, source, description)

    # -----------------------------------------------------------------------
    # Pipelines
    # -----------------------------------------------------------------------

    async def _sample_frames(self, workspace: RequestWorkspace, source: Path) -> List[FrameImage]:
        media = self.config.media
        small = await downscale_video(source, workspace.small_video, media)
        paths = await extract_frames(small, workspace.frames_dir, media)
        if not paths:
            raise MediaProcessingError(NO_FRAMES_MESSAGE)
        return [FrameImage.from_path(p) for p in paths]

    async def _run_plan(
        self,
        workspace: RequestWorkspace,
        source: Path,
        description: Optional[str],
    ) -> PlanResponse:
        frames = await self._sample_frames(workspace, source)
        raw = await run_in_threadpool(
            call_vision,
            get_plan_prompt(description),
            frames,
            system=PLAN_SYSTEM_PROMPT,
            max_tokens=self.config.ai.max_tokens,
            json_mode=True,
        )
        summary, plan = parse_plan(raw)
        logger.info(f"Plan ready: {len(plan)} step(s)")
        return PlanResponse(summary=summary, plan=plan)

    async def _run_analysis(
        self,
        workspace: RequestWorkspace,
        source: Path,
        description: Optional[str],
    ) -> FrameAnalysisResponse:
        frames = await self._sample_frames(workspace, source)
        text = await run_in_threadpool(
            call_vision,
            get_analysis_prompt(description),
            frames,
            system=ANALYSIS_SYSTEM_PROMPT,
            max_tokens=self.config.ai.max_tokens,
        )
        return FrameAnalysisResponse(analisi=text)

    async def _run_transcription(
        self,
        workspace: RequestWorkspace,
        source: Path,
        description: Optional[str],
    ) -> TranscriptionResponse:
        pipeline = self.config.pipeline
        if pipeline.extract_audio:
            media_path = await extract_audio(source, workspace.audio, self.config.media)
        else:
            # The speech API accepts common video containers directly
            media_path = source

        transcript = await run_in_threadpool(call_transcription, media_path)

        analysis = None
        if pipeline.analyze_transcript and transcript:
            analysis = await run_in_threadpool(
                call_completion,
                get_transcript_prompt(transcript, description),
                system=TRANSCRIPT_SYSTEM_PROMPT,
                max_tokens=self.config.ai.max_tokens,
            )
        return TranscriptionResponse(trascrizione=transcript, analisi=analysis)


def get_analysis_service() -> VideoAnalysisService:
    """FastAPI dependency returning a service bound to the current config."""
    return VideoAnalysisService(get_config())
