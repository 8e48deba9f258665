"""Base class for process strategies."""

from abc import ABC, abstractmethod

from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.results import ProcessResult


class ProcessStrategy(ABC):
    """
    One variant of a process family bound to its inlet flow and target.

    Subclasses validate every argument in ``__init__`` so that invalid or
    direction-inconsistent requests fail before any iteration starts, and
    compute the outcome in ``apply()``. ``apply()`` has no side effects and
    may be called repeatedly.
    """

    process_type: ProcessType
    process_mode: ProcessMode

    def __init__(self, inlet_flow: HumidAirFlow):
        require_not_none(inlet_flow, "Inlet flow")
        self.inlet_flow = inlet_flow

    @abstractmethod
    def apply(self) -> ProcessResult:
        """Compute the process result."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(inlet_flow={self.inlet_flow!r})"
