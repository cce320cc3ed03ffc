"""Diagnosis-request pipeline: encode, prompt, infer, resolve.

The model's reply is reduced to a lookup key by ``normalize_label`` and
mapped onto the static recommendation table. Labels the table does not
know still come back as a complete result built from the fallback record.
"""

import logging
from typing import Optional, Sequence

from core.config import AppConfig
from core.image_encoder import ImageEncoder
from core.inference_client import GeminiClient
from core.prompt_builder import build_prompt
from core.recommendations import FALLBACK_RECORD, get_recommendation
from core.utils import (
    DiagnosisResult,
    FlowMode,
    ImageRef,
    PatientContext,
    ProgressCallback,
)

logger = logging.getLogger(__name__)


def normalize_label(text: Optional[str]) -> str:
    """Trim surrounding whitespace and lowercase."""
    return (text or "").strip().lower()


def resolve_diagnosis(raw_reply: Optional[str]) -> DiagnosisResult:
    """Map a raw model reply onto a recommendation record."""
    label = normalize_label(raw_reply)
    record = get_recommendation(label)
    if record is None:
        logger.info("Condition %r not in recommendation table", label)
        return DiagnosisResult.from_record(label, FALLBACK_RECORD, recognized=False)
    return DiagnosisResult.from_record(label, record)


class DiagnosisPipeline:
    """Runs one complete analysis for a set of photographs."""

    def __init__(
        self,
        config: AppConfig,
        client: Optional[GeminiClient] = None,
        encoder: Optional[ImageEncoder] = None,
    ):
        self._config = config
        self._client = client or GeminiClient(config)
        self._encoder = encoder or ImageEncoder(
            max_image_size=config.max_image_size,
            quality=config.image_quality,
        )

    def run(
        self,
        mode: FlowMode,
        images: Sequence[ImageRef],
        context: Optional[PatientContext] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DiagnosisResult:
        """Encode the images, ask the model, and resolve its answer.

        Raises ConfigurationError before encoding anything if no usable
        API key is configured.
        """
        from i18n import t

        total = len(images) + 2

        def report(step, msg):
            if on_progress:
                on_progress(step, total, msg)

        self._client.check_configuration()

        payloads = self._encoder.encode_all(
            images,
            on_progress=lambda i, n, name: report(
                i, t("progress.encoding", current=i, total=n)
            ),
        )

        prompt = build_prompt(mode, context)

        report(len(images) + 1, t("progress.waiting_model"))
        reply = self._client.generate(prompt, payloads)

        report(total, t("progress.resolving"))
        result = resolve_diagnosis(reply)
        logger.info("Diagnosis resolved to %r (recognized=%s)", result.condition, result.recognized)
        return result
