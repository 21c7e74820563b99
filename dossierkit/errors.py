"""Exception hierarchy shared by every workflow pack."""


class CoreError(Exception):
    """Base class for all errors raised by the package."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInputError(CoreError, ValueError):
    """Input data could not be parsed or failed validation."""


class InputSchemaError(CoreError, ValueError):
    """A workflow input declared an unexpected schema version."""


class ArtifactMissingError(CoreError):
    """A workflow input lacks a required artifact."""


class WorkflowTransitionError(CoreError):
    """A workflow was asked to move between stages that are not adjacent."""