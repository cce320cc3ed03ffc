"""Thin adapter over the Gemini generate-content API."""

import base64
import binascii
import logging
from typing import List, Sequence

from google import genai
from google.genai import types

from core.config import AppConfig
from core.errors import ConfigurationError, EncodingError, InferenceError
from core.utils import IMAGE_MIME_TYPE, MAX_MULTI_IMAGES

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends one prompt plus inline JPEG images and returns the reply text.

    The SDK client is created on first use, so a missing key is reported
    before anything touches the network. No retries are attempted.
    """

    def __init__(self, config: AppConfig, client=None):
        self._config = config
        self._client = client

    @property
    def model(self) -> str:
        return self._config.model

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(
                api_key=self._config.api_key,
                http_options=types.HttpOptions(timeout=self._config.analysis_timeout_ms),
            )
        return self._client

    def check_configuration(self):
        """Raise ConfigurationError if the API key is unset or the placeholder."""
        if not self._config.has_api_key:
            raise ConfigurationError("Gemini API key is not configured")

    @staticmethod
    def build_contents(prompt: str, images: Sequence[str]) -> List[types.Content]:
        """Prompt text first, then one inline image part per payload, in order."""
        parts = [types.Part.from_text(text=prompt)]
        for index, payload in enumerate(images):
            try:
                data = base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError) as e:
                raise EncodingError(f"Image payload {index} is not valid base64") from e
            parts.append(types.Part.from_bytes(data=data, mime_type=IMAGE_MIME_TYPE))
        return [types.Content(role="user", parts=parts)]

    def generate(self, prompt: str, images: Sequence[str]) -> str:
        """Run one inference round-trip and return the raw reply text."""
        self.check_configuration()
        if not 1 <= len(images) <= MAX_MULTI_IMAGES:
            raise InferenceError(
                f"Expected 1 to {MAX_MULTI_IMAGES} images, got {len(images)}"
            )

        contents = self.build_contents(prompt, images)
        logger.info("Sending %d image(s) to %s", len(images), self.model)

        try:
            response = self._get_client().models.generate_content(
                model=self.model,
                contents=contents,
            )
        except Exception as e:
            logger.exception("Gemini request failed")
            raise InferenceError(f"Gemini request failed: {e}") from e

        text = response.text
        if text is None:
            feedback = getattr(response, "prompt_feedback", None)
            block_reason = getattr(feedback, "block_reason", None)
            if block_reason:
                logger.error("Gemini blocked the request: %s", block_reason)
                raise InferenceError(f"Request blocked: {block_reason}")
            return ""
        return text
