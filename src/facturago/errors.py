"""Exception hierarchy shared by the services, adapters and the API."""


class FacturagoError(Exception):
    """Base class for application errors."""


class FormValidationError(FacturagoError):
    """User input rejected before submission; nothing was mutated."""


class SettingsPersistenceError(FacturagoError):
    """The settings gateway could not store the company settings."""


class ImageGenerationError(FacturagoError):
    """The generative image API failed or returned no image payload."""


class DocumentRenderError(FacturagoError):
    """A billing document cannot be rendered with the current settings."""
