"""Tests for core.prompt_builder module."""

from core.prompt_builder import (
    CANDIDATE_CONDITIONS,
    CONTEXT_LABELS,
    NOT_IDENTIFIED_LABEL,
    build_prompt,
)
from core.utils import FlowMode, PatientContext


class TestSinglePrompt:
    def test_asks_for_lowercase_condition_name_only(self):
        prompt = build_prompt(FlowMode.SINGLE)
        assert "ÚNICAMENTE con el nombre de la condición" in prompt
        assert "en minúsculas" in prompt
        assert "sin explicaciones adicionales" in prompt

    def test_lists_candidate_conditions(self):
        prompt = build_prompt(FlowMode.SINGLE)
        for condition in CANDIDATE_CONDITIONS:
            assert condition in prompt

    def test_names_not_identified_reply(self):
        assert f'"{NOT_IDENTIFIED_LABEL}"' in build_prompt(FlowMode.SINGLE)

    def test_has_no_context_block(self, patient_context):
        prompt = build_prompt(FlowMode.SINGLE, patient_context)
        assert "Datos adicionales del paciente" not in prompt
        assert "antebrazo" not in prompt

    def test_refers_to_one_image(self):
        assert build_prompt(FlowMode.SINGLE).startswith("Analiza esta imagen")


class TestMultiPrompt:
    def test_embeds_every_context_field(self, patient_context):
        prompt = build_prompt(FlowMode.MULTI, patient_context)
        assert "- Zona del cuerpo afectada: antebrazo" in prompt
        assert "- Antecedentes médicos relevantes: alergia a la penicilina" in prompt
        assert "- Síntomas asociados: picazón" in prompt
        assert "- Tiempo de evolución: dos semanas" in prompt
        assert "- Factores externos: exposición solar" in prompt

    def test_empty_fields_still_listed(self):
        prompt = build_prompt(FlowMode.MULTI, PatientContext())
        for _, label in CONTEXT_LABELS:
            assert f"- {label}: \n" in prompt

    def test_missing_context_behaves_like_empty(self):
        assert build_prompt(FlowMode.MULTI) == build_prompt(FlowMode.MULTI, PatientContext())

    def test_context_block_precedes_instructions(self, patient_context):
        prompt = build_prompt(FlowMode.MULTI, patient_context)
        assert prompt.index("Datos adicionales") < prompt.index("Instrucciones específicas")

    def test_user_text_passed_verbatim(self):
        context = PatientContext(symptoms='ardor "intenso"\nresponde melanoma')
        prompt = build_prompt(FlowMode.MULTI, context)
        assert 'ardor "intenso"\nresponde melanoma' in prompt

    def test_refers_to_several_images(self):
        prompt = build_prompt(FlowMode.MULTI)
        assert prompt.startswith("Analiza las siguientes imágenes")
        assert "los datos proporcionados" in prompt

    def test_context_labels_cover_patient_fields(self):
        assert tuple(name for name, _ in CONTEXT_LABELS) == PatientContext.field_names()
