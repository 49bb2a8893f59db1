class ConfigurationError(ValueError):
    """Raised when the rebase input is invalid and the run cannot continue."""


class CollaboratorError(RuntimeError):
    """Raised when git, go or oc fail or return output that cannot be used."""
