"""
Exceptions raised by the claim severity analysis.
"""


class SeverityAnalysisError(Exception):
    """Base class for every failure raised by the analysis stages."""


class DataLoadError(SeverityAnalysisError):
    """The claims file is missing or could not be parsed."""


class SchemaError(SeverityAnalysisError):
    """A required column is absent or has the wrong type."""


class FitError(SeverityAnalysisError):
    """The GLM could not be fitted (degenerate design, no convergence, bad response)."""


class PipelineStageError(SeverityAnalysisError):
    """Wraps the failure of one pipeline stage so the caller knows where it stopped."""

    def __init__(self, stage, cause):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed: {type(cause).__name__}: {cause}")
