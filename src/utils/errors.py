"""
Exception types shared across the tracker.

Stage and route-table errors are programming errors and are raised loudly.
Route misses, handler failures and malformed dates are recovered where they
occur and never reach these types.
"""


class InvalidStageError(ValueError):
    """A stage number (or day) outside the pipeline's stage table."""

    def __init__(self, stage, message: str = None):
        self.stage = stage
        super().__init__(message or f"Invalid stage: {stage!r} (expected 1-10)")


class InvalidPatternError(ValueError):
    """A route template that cannot be compiled or reversed."""


class MissingParamError(KeyError):
    """A named parameter required by a route template was not supplied."""

    def __init__(self, name: str, template: str):
        self.name = name
        self.template = template
        super().__init__(f"Missing parameter '{name}' for route '{template}'")


class ProjectValidationError(ValueError):
    """Project data failed validation. Carries every validation message."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class ProjectNotFoundError(LookupError):
    """No project exists with the given id."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")
