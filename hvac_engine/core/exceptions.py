"""Custom exception hierarchy for the humid air process engine."""

from typing import Optional


class HvacEngineError(Exception):
    """Base exception for all hvac_engine errors."""
    pass


class MissingArgumentError(HvacEngineError):
    """Raised when a required value is None at construction."""
    pass


class InvalidArgumentError(HvacEngineError):
    """Raised when a value is outside its domain or points the wrong way."""
    pass


class SolutionNotConvergedError(HvacEngineError):
    """
    Raised when the root finder cannot meet its tolerance.

    Attributes:
        solver_name: Label of the root finder instance that failed.
        x: Last best argument evaluated.
        residual: Residual value at ``x``.
        target: Target value the residual was measured against, if known.
    """

    def __init__(self, message: str, solver_name: str = "",
                 x: Optional[float] = None, residual: Optional[float] = None,
                 target: Optional[float] = None):
        super().__init__(message)
        self.solver_name = solver_name
        self.x = x
        self.residual = residual
        self.target = target


class PipelineUsageError(HvacEngineError):
    """Raised when a pipeline is run or composed incorrectly."""
    pass


class DuplicateBlockError(PipelineUsageError):
    """Raised when a block id is added to a pipeline twice."""
    pass


class BlockNotFoundError(PipelineUsageError):
    """Raised when a block id is not present in a pipeline."""
    pass


class ConfigurationError(HvacEngineError):
    """Raised when a pipeline configuration is invalid."""
    pass
