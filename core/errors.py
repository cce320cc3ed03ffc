"""Error types raised by the diagnosis pipeline and the flow controller.

Each error carries an i18n ``message_key`` so the UI can show a short,
translated notice without parsing exception text.
"""


class DermaError(Exception):
    """Base class for every recoverable application error."""

    message_key = "error.generic"

    def __init__(self, message: str = "", **params):
        super().__init__(message or self.message_key)
        self.params = params

    def user_message(self) -> str:
        from i18n import t
        return t(self.message_key, **self.params)


class PermissionDenied(DermaError):
    """Camera access was refused or no camera is available."""

    message_key = "error.camera_denied"


class SelectionError(DermaError):
    """The picker failed or returned an unacceptable number of images."""

    message_key = "error.selection"


class EncodingError(DermaError):
    """An image could not be read or converted to base64."""

    message_key = "error.encoding"


class InferenceError(DermaError):
    """The remote model call failed or returned a non-success response."""

    message_key = "error.inference"


class ConfigurationError(InferenceError):
    """The API key is missing or still set to the placeholder value."""

    message_key = "error.api_key"


class InvalidTransition(DermaError):
    """An action was attempted from a flow state that does not allow it."""

    message_key = "error.invalid_action"


class ImageCountError(SelectionError):
    """The number of selected images is outside the bounds of the mode."""

    message_key = "error.image_count"
