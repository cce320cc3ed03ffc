"""Screen-flow state machine shared by the single and multi photo tabs.

States: IDLE -> SELECTING -> READY -> ANALYZING -> RESULT, with reset back
to IDLE from READY or RESULT. Rejected actions raise and leave the state
untouched, so the widget only has to show the error notice.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

from core.config import AppConfig
from core.errors import ConfigurationError, ImageCountError, InvalidTransition
from core.utils import (
    DiagnosisResult,
    FlowMode,
    FlowState,
    ImageRef,
    PatientContext,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[FlowState], None]


class FlowController:
    """Tracks the held images, patient context and latest diagnosis."""

    def __init__(
        self,
        mode: FlowMode,
        config: AppConfig,
        on_change: Optional[StateListener] = None,
    ):
        self._mode = mode
        self._config = config
        self._on_change = on_change
        self._state = FlowState.IDLE
        self._images: Tuple[ImageRef, ...] = ()
        self._context = PatientContext()
        self._diagnosis: Optional[DiagnosisResult] = None
        self._form_visible = False

    # --- Read-only state ---

    @property
    def mode(self) -> FlowMode:
        return self._mode

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def images(self) -> Tuple[ImageRef, ...]:
        return self._images

    @property
    def context(self) -> PatientContext:
        return self._context

    @property
    def diagnosis(self) -> Optional[DiagnosisResult]:
        return self._diagnosis

    @property
    def form_visible(self) -> bool:
        return self._form_visible

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def analyze_enabled(self) -> bool:
        return self._state is FlowState.READY

    @property
    def reset_enabled(self) -> bool:
        return self._state in (FlowState.IDLE, FlowState.READY, FlowState.RESULT)

    def set_config(self, config: AppConfig):
        """Swap in a new configuration, e.g. after the key is edited in Settings."""
        self._config = config

    # --- Transitions ---

    def _require(self, *allowed: FlowState):
        if self._state not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise InvalidTransition(
                f"Action not allowed in state {self._state.value} (expected {names})"
            )

    def _transition(self, new_state: FlowState):
        if new_state is not self._state:
            logger.debug("%s flow: %s -> %s", self._mode.value, self._state.value, new_state.value)
        self._state = new_state
        if self._on_change:
            self._on_change(new_state)

    def begin_selection(self):
        """The picker (gallery or camera) is being opened."""
        self._require(FlowState.IDLE)
        self._transition(FlowState.SELECTING)

    def cancel_selection(self):
        """The picker was dismissed without choosing anything."""
        self._require(FlowState.SELECTING)
        self._transition(FlowState.IDLE)

    def select_images(self, refs: Sequence[ImageRef]):
        """Hold the chosen images and move to READY.

        The count must match the mode (exactly one, or three to five);
        otherwise ImageCountError is raised and the controller is left in
        IDLE without ever reaching READY.
        """
        self._require(FlowState.IDLE, FlowState.SELECTING)
        refs = tuple(refs)
        if not self._mode.accepts_count(len(refs)):
            low, high = self._mode.image_bounds
            if self._state is FlowState.SELECTING:
                self._transition(FlowState.IDLE)
            raise ImageCountError(
                f"Got {len(refs)} image(s), expected {low} to {high}",
                count=len(refs), min=low, max=high,
            )
        self._images = refs
        self._form_visible = self._mode is FlowMode.MULTI
        self._transition(FlowState.READY)

    def update_context(self, **values: str):
        """Store patient-typed context fields (multi-photo form)."""
        self._require(FlowState.READY)
        valid = PatientContext.field_names()
        for name, value in values.items():
            if name not in valid:
                raise ValueError(f"Unknown context field: {name}")
            setattr(self._context, name, value or "")

    def begin_analysis(self):
        """Gate and enter ANALYZING. Raises without changing state on failure."""
        self._require(FlowState.READY)
        if not self._mode.accepts_count(len(self._images)):
            low, high = self._mode.image_bounds
            raise ImageCountError(
                f"Holding {len(self._images)} image(s), expected {low} to {high}",
                count=len(self._images), min=low, max=high,
            )
        if not self._config.has_api_key:
            raise ConfigurationError("Gemini API key is not configured")
        self._transition(FlowState.ANALYZING)

    def complete_analysis(self, result: DiagnosisResult):
        """The inference call settled successfully."""
        self._require(FlowState.ANALYZING)
        self._diagnosis = result
        self._transition(FlowState.RESULT)

    def fail_analysis(self):
        """The inference call failed; keep images and context for a retry."""
        self._require(FlowState.ANALYZING)
        self._transition(FlowState.READY)

    def reset(self):
        """Drop images, context and diagnosis and return to IDLE."""
        self._require(FlowState.IDLE, FlowState.READY, FlowState.RESULT)
        self._images = ()
        self._context.clear()
        self._diagnosis = None
        self._form_visible = False
        self._transition(FlowState.IDLE)
