"""Exception types raised by the completion layer.

Propagation:
    Clients and the selector raise these and never catch them. The HTTP and CLI
    adapters are the only places that turn them into user-facing output.
"""


class PromptGateError(Exception):
    """Base class for all completion-layer failures."""


class ConfigurationError(PromptGateError):
    """A credential required by the selected backend is missing.

    Always raised before any network I/O.
    """

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing {self.missing[0]} in environment variables.")


class UpstreamError(PromptGateError):
    """The provider could not be reached or answered with an unusable body."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ProviderReportedError(UpstreamError):
    """The provider answered with a well-formed `error` object."""

    def __init__(self, message, status_code=None, code=None):
        super().__init__(message, status_code=status_code)
        self.code = code
