"""Pydantic schemas for the video analysis endpoints.

Field names are Italian (messaggio, stato, trascrizione, analisi) to match
the JSON the existing clients already read.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

COMPLETED_MESSAGE = "✅ Analisi completata"
NO_FILE_MESSAGE = "❌ Nessun file ricevuto."
FAILURE_MESSAGE = "Errore durante l'analisi del video."
LIVENESS_MESSAGE = "✅ Operator24 backend attivo e funzionante!"

# Error detail returned to clients is cut to this many characters
DETAIL_LIMIT = 300


class ActionStep(BaseModel):
    """One step of the automation plan.

    Every field is free-form and optional (a step may carry a number in
    ``text`` or an object in ``condition``); fields the model adds beyond
    these are preserved.
    """
    model_config = ConfigDict(extra="allow")

    type: Optional[Any] = Field(None, description="navigate | click | type | waitFor | press | repeat_while | screenshot")
    selector: Optional[Any] = Field(None, description="CSS/UI selector when known")
    target: Optional[Any] = Field(None, description="Textual target, e.g. 'bottone Salva'")
    text: Optional[Any] = Field(None, description="Text to type")
    url: Optional[Any] = Field(None, description="URL to navigate to")
    condition: Optional[Any] = Field(None, description="Loop condition for repeat_while")


class AnalysisResponse(BaseModel):
    """Base response of every pipeline."""
    messaggio: str = Field(COMPLETED_MESSAGE, description="Human-readable outcome")
    stato: str = Field("ok", description="Machine-readable outcome")

    def to_payload(self) -> Dict[str, Any]:
        """JSON body sent to the client."""
        return self.model_dump()


class PlanResponse(AnalysisResponse):
    summary: str = Field("", description="What the operator is doing")
    plan: List[ActionStep] = Field(default_factory=list, description="Automation plan")

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        # Steps carry only the fields the model actually produced
        payload["plan"] = [step.model_dump(exclude_none=True) for step in self.plan]
        return payload


class FrameAnalysisResponse(AnalysisResponse):
    analisi: str = Field("", description="Free-text description of the frames")


class TranscriptionResponse(AnalysisResponse):
    trascrizione: str = Field("", description="Transcript of the audio track")
    analisi: Optional[str] = Field(None, description="Analysis of the transcript, if enabled")


class ErrorResponse(BaseModel):
    messaggio: str
    dettaglio: Optional[str] = None


class LivenessResponse(BaseModel):
    messaggio: str = LIVENESS_MESSAGE


class HealthResponse(BaseModel):
    status: str = "ok"
    ffmpeg: Optional[str] = None
    provider: Optional[str] = None
    provider_ok: Optional[bool] = None
    default_mode: str
