"""Prompt templates for the video pipelines.

The operator-facing wording is Italian, matching the clients that call
the service. Placeholders use ``str.format`` fields.
"""
from typing import Optional

# Action types the automation runner understands
PLAN_ACTION_TYPES = (
    "navigate",
    "click",
    "type",
    "waitFor",
    "press",
    "repeat_while",
    "screenshot",
)

UNSPECIFIED_GOAL = "(non specificato)"

# =============================================================================
# Plan pipeline (frames -> summary + action plan)
# =============================================================================

PLAN_SYSTEM_PROMPT = "Sei un planner di automazione. Rispondi SOLO con JSON valido."

PLAN_PROMPT = """Sei un analista di processi. Guarda i fotogrammi (in ordine) del video caricato dall'utente.
OBIETTIVO UTENTE (se fornito): {goal}

1) Descrivi brevemente cosa sta facendo l'operatore (summary).
2) Genera un PIANO OPERATIVO come array di azioni, con campi standardizzati:
   - type: {action_types}
   - selector (se noto) oppure "target" testuale (es. "cella A1", "bottone Salva")
   - text/url (se serve)
   - condition (per repeat_while)
3) Inserisci pattern intelligenti (es: repeat_while finché riga non vuota, gestione errori base).
4) Rispondi SOLO in JSON con la forma:
{{
  "summary": "...",
  "plan": [ {{ "type":"...", "target":"...", "selector":"...", "text":"...", "url":"...", "condition":"..." }}, ... ]
}}
Niente testo fuori dal JSON."""

# Used when the model answers with something that is not a JSON object
UNSTRUCTURED_SUMMARY = "Analisi non strutturata."

# =============================================================================
# Analysis pipeline (frames -> free text)
# =============================================================================

ANALYSIS_SYSTEM_PROMPT = "Sei un analista di processi che osserva video di lavoro al computer."

ANALYSIS_PROMPT = """Guarda i fotogrammi (in ordine) del video caricato dall'utente.
OBIETTIVO UTENTE (se fornito): {goal}

Descrivi in modo chiaro e conciso cosa fa l'operatore passo per passo,
quali applicazioni usa e quali operazioni ripetitive potrebbero essere automatizzate."""

# =============================================================================
# Transcription pipeline (transcript -> free text)
# =============================================================================

TRANSCRIPT_SYSTEM_PROMPT = "Sei un assistente che analizza trascrizioni di video."

TRANSCRIPT_ANALYSIS_PROMPT = """Di seguito la trascrizione dell'audio di un video caricato dall'utente.
OBIETTIVO UTENTE (se fornito): {goal}

<trascrizione>
{transcript}
</trascrizione>

Riassumi il contenuto e indica le azioni o i passaggi operativi descritti."""


def _goal(description: Optional[str]) -> str:
    description = (description or "").strip()
    return description or UNSPECIFIED_GOAL


def get_plan_prompt(description: Optional[str] = None) -> str:
    """Build the plan prompt with the user's goal, or the placeholder if blank."""
    return PLAN_PROMPT.format(
        goal=_goal(description),
        action_types=" | ".join(f'"{t}"' for t in PLAN_ACTION_TYPES),
    )


def get_analysis_prompt(description: Optional[str] = None) -> str:
    return ANALYSIS_PROMPT.format(goal=_goal(description))


def get_transcript_prompt(transcript: str, description: Optional[str] = None) -> str:
    return TRANSCRIPT_ANALYSIS_PROMPT.format(goal=_goal(description), transcript=transcript)
