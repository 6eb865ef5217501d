"""Tests for prompt templates and plan parsing."""
import json

from operator24.ai_provider.prompts import (
    PLAN_ACTION_TYPES,
    UNSPECIFIED_GOAL,
    UNSTRUCTURED_SUMMARY,
    get_analysis_prompt,
    get_plan_prompt,
    get_transcript_prompt,
)
from operator24.analysis.service import parse_plan


class TestPlanPrompt:
    def test_includes_user_goal(self):
        prompt = get_plan_prompt("compila la fattura")
        assert "OBIETTIVO UTENTE (se fornito): compila la fattura" in prompt

    def test_blank_goal_uses_placeholder(self):
        for description in (None, "", "   "):
            assert f"OBIETTIVO UTENTE (se fornito): {UNSPECIFIED_GOAL}" in get_plan_prompt(description)

    def test_lists_every_action_type(self):
        prompt = get_plan_prompt()
        for action in PLAN_ACTION_TYPES:
            assert f'"{action}"' in prompt

    def test_json_shape_braces_are_literal(self):
        prompt = get_plan_prompt()
        assert '"summary": "..."' in prompt
        assert prompt.rstrip().endswith("Niente testo fuori dal JSON.")


class TestOtherPrompts:
    def test_analysis_prompt_goal(self):
        assert "archivia le mail" in get_analysis_prompt("archivia le mail")

    def test_transcript_prompt_embeds_transcript(self):
        prompt = get_transcript_prompt("prima apro excel", None)
        assert "<trascrizione>\nprima apro excel\n</trascrizione>" in prompt
        assert UNSPECIFIED_GOAL in prompt


class TestParsePlan:
    def test_valid_object(self):
        summary, plan = parse_plan(json.dumps({
            "summary": "Inserimento ordini",
            "plan": [{"type": "click", "selector": "#save", "extra": 1}],
        }))
        assert summary == "Inserimento ordini"
        assert len(plan) == 1
        assert plan[0].type == "click"
        assert plan[0].model_dump(exclude_none=True) == {"type": "click", "selector": "#save", "extra": 1}

    def test_none_is_empty_object(self):
        assert parse_plan(None) == ("", [])

    def test_invalid_json_falls_back(self):
        assert parse_plan("not json") == (UNSTRUCTURED_SUMMARY, [])

    def test_json_array_falls_back(self):
        assert parse_plan("[1, 2]") == (UNSTRUCTURED_SUMMARY, [])

    def test_missing_summary_and_bad_plan(self):
        assert parse_plan(json.dumps({"plan": {"type": "click"}})) == ("", [])

    def test_non_object_steps_dropped(self):
        _, plan = parse_plan(json.dumps({"plan": ["click", {"type": "press", "text": "Enter"}, 3]}))
        assert [step.type for step in plan] == ["press"]

    def test_non_string_values_are_relayed(self):
        steps = [
            {"type": "press", "text": 13},
            {"type": "repeat_while", "condition": {"cell": "A1", "until": "empty"}},
            {"type": "click", "target": "Salva"},
        ]
        _, plan = parse_plan(json.dumps({"plan": steps}))
        assert [step.model_dump(exclude_none=True) for step in plan] == steps
