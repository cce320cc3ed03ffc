"""Tests for core.diagnosis module."""

import base64

import pytest

from conftest import FakeGeminiClient
from core.diagnosis import DiagnosisPipeline, normalize_label, resolve_diagnosis
from core.errors import ConfigurationError, EncodingError, InferenceError
from core.prompt_builder import NOT_IDENTIFIED_LABEL
from core.recommendations import FALLBACK_RECORD, RECOMMENDATION_TABLE
from core.utils import FlowMode


class TestNormalizeLabel:
    def test_trims_and_lowercases(self):
        assert normalize_label("  ACNÉ ") == "acné"

    def test_idempotent(self):
        for text in ("  Herpes Zoster\n", "melanoma", "", "\tRosácea  "):
            once = normalize_label(text)
            assert normalize_label(once) == once

    def test_none_is_empty(self):
        assert normalize_label(None) == ""

    def test_inner_whitespace_kept(self):
        assert normalize_label(" Herpes  Zoster ") == "herpes  zoster"


class TestResolveDiagnosis:
    @pytest.mark.parametrize("label", sorted(RECOMMENDATION_TABLE))
    def test_every_table_label_resolves_to_its_record(self, label):
        record = RECOMMENDATION_TABLE[label]
        result = resolve_diagnosis(label)
        assert result.condition == label
        assert result.description == record.description
        assert result.medications == record.medications
        assert result.advice == record.advice
        assert result.recognized

    def test_acne_scenario(self):
        result = resolve_diagnosis("  ACNÉ ")
        assert result.condition == "acné"
        assert result.description == "Condición común de la piel caracterizada por poros obstruidos"
        assert len(result.medications) == 3
        assert result.medications[0] == "Peróxido de benzoilo"

    def test_not_identified_reply_uses_fallback(self):
        result = resolve_diagnosis(NOT_IDENTIFIED_LABEL)
        assert result.condition == "condición no identificada"
        assert result.description == FALLBACK_RECORD.description
        assert result.medications == FALLBACK_RECORD.medications
        assert result.advice == FALLBACK_RECORD.advice
        assert not result.recognized

    @pytest.mark.parametrize("reply, label", [
        ("", ""),
        ("   ", ""),
        ("Vitiligo", "vitiligo"),
        ("ACNE", "acne"),
        ("acné vulgar", "acné vulgar"),
        ("El paciente presenta acné.", "el paciente presenta acné."),
    ])
    def test_unknown_replies_keep_normalized_label(self, reply, label):
        result = resolve_diagnosis(reply)
        assert result.condition == label
        assert result.description == FALLBACK_RECORD.description
        assert result.medications == FALLBACK_RECORD.medications
        assert not result.recognized


class TestDiagnosisPipeline:
    def test_single_photo_run(self, api_config, sample_jpeg):
        client = FakeGeminiClient(reply=" Psoriasis\n")
        pipeline = DiagnosisPipeline(api_config, client=client)

        result = pipeline.run(FlowMode.SINGLE, [sample_jpeg])

        assert result.condition == "psoriasis"
        assert result.recognized
        assert len(client.calls) == 1
        prompt, images = client.calls[0]
        assert len(images) == 1
        assert base64.b64decode(images[0])[:2] == b"\xff\xd8"
        assert "Datos adicionales del paciente" not in prompt

    def test_multi_photo_run_embeds_context(self, api_config, sample_photo_set, patient_context):
        client = FakeGeminiClient(reply="dermatitis")
        pipeline = DiagnosisPipeline(api_config, client=client)

        result = pipeline.run(FlowMode.MULTI, sample_photo_set[:3], patient_context)

        assert result.condition == "dermatitis"
        prompt, images = client.calls[0]
        assert len(images) == 3
        assert "antebrazo" in prompt
        assert "dos semanas" in prompt

    def test_reports_progress(self, api_config, sample_photo_set):
        steps = []
        pipeline = DiagnosisPipeline(api_config, client=FakeGeminiClient())
        pipeline.run(
            FlowMode.MULTI, sample_photo_set[:3],
            on_progress=lambda step, total, msg: steps.append((step, total)),
        )
        assert steps[0] == (1, 5)
        assert steps[-1] == (5, 5)
        assert [s for s, _ in steps] == sorted(s for s, _ in steps)

    def test_missing_key_stops_before_encoding(self, placeholder_config):
        client = FakeGeminiClient(configured=False)
        pipeline = DiagnosisPipeline(placeholder_config, client=client)
        with pytest.raises(ConfigurationError):
            pipeline.run(FlowMode.SINGLE, ["/does/not/exist.jpg"])
        assert client.calls == []

    def test_unreadable_image_raises_encoding_error(self, api_config, tmp_dir):
        bad = tmp_dir / "broken.jpg"
        bad.write_bytes(b"not an image")
        client = FakeGeminiClient()
        pipeline = DiagnosisPipeline(api_config, client=client)
        with pytest.raises(EncodingError):
            pipeline.run(FlowMode.SINGLE, [str(bad)])
        assert client.calls == []

    def test_inference_error_propagates(self, api_config, sample_jpeg):
        client = FakeGeminiClient(error=InferenceError("network down"))
        pipeline = DiagnosisPipeline(api_config, client=client)
        with pytest.raises(InferenceError):
            pipeline.run(FlowMode.SINGLE, [sample_jpeg])
