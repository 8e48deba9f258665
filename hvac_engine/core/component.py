"""
Process block abstraction.

A process block wraps one process family in a pipeline stage: it pulls its
inlet flow from an input connector, builds the strategy for its configured
target, applies it, and publishes the outlet flow on its output connector.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from hvac_engine.core.connector import InputConnector, OutputConnector
from hvac_engine.core.enums import ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError, PipelineUsageError
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.processes.base import ProcessStrategy
from hvac_engine.processes.results import ProcessResult


class ProcessBlock(ABC):
    """
    Abstract base class for all pipeline stages.

    Lifecycle of ``run()``:

    1. pull the inlet flow from ``input_connector``
    2. ``create_strategy(inlet_flow)`` validates the target against the inlet
    3. ``apply()`` computes a fresh result
    4. the outlet flow is written to ``output_connector``

    Attributes:
        block_id: Identifier unique within a pipeline.
        input_connector: Inlet slot, wired to the previous block by the pipeline.
        output_connector: Outlet slot, read by the next block.
        logger: Per-block logger named ``hvac_engine.block.<block_id>``.

    Not safe for concurrent use: connectors and the last result are mutated
    on every run.
    """

    process_type: ProcessType

    def __init__(self, block_id: str) -> None:
        if not block_id:
            raise InvalidArgumentError("Block id must be a non-empty string")
        self.block_id = block_id
        self.input_connector: InputConnector[HumidAirFlow] = InputConnector()
        self.output_connector: OutputConnector[HumidAirFlow] = OutputConnector()
        self.logger = logging.getLogger(f"hvac_engine.block.{block_id}")
        self._last_result: Optional[ProcessResult] = None

    @abstractmethod
    def create_strategy(self, inlet_flow: HumidAirFlow) -> ProcessStrategy:
        """
        Build the strategy for the block target and the given inlet flow.

        Raises:
            MissingArgumentError: If a required setting is missing.
            InvalidArgumentError: If the target is inconsistent with the inlet.
        """
        pass

    def run(self) -> ProcessResult:
        """
        Execute the block once.

        Returns:
            Fresh process result, also available as ``last_result``.

        Raises:
            PipelineUsageError: If no inlet flow can be resolved.
        """
        inlet_flow = self.input_connector.pull()
        if inlet_flow is None:
            raise PipelineUsageError(f"Block '{self.block_id}' has no inlet flow")

        strategy = self.create_strategy(inlet_flow)
        result = strategy.apply()
        self._last_result = result
        self.output_connector.set(result.outlet_flow)

        self.logger.debug(
            f"{type(strategy).__name__}: {inlet_flow.temperature_c:.2f} degC / "
            f"{inlet_flow.relative_humidity_pct:.2f} % -> "
            f"{result.outlet_flow.temperature_c:.2f} degC / "
            f"{result.outlet_flow.relative_humidity_pct:.2f} %, "
            f"Q = {result.heat_of_process_w:.1f} W"
        )
        return result

    def set_inlet_flow(self, inlet_flow: HumidAirFlow) -> None:
        """
        Supply the inlet directly, used for the first block of a pipeline.

        Detaches the input connector from any upstream slot.
        """
        self.input_connector.disconnect()
        self.input_connector.set(inlet_flow)

    @property
    def last_result(self) -> Optional[ProcessResult]:
        return self._last_result

    @property
    def outlet_flow(self) -> Optional[HumidAirFlow]:
        return self.output_connector.get()

    def get_state(self) -> Dict[str, Any]:
        """
        Return block settings and the last result as JSON-serializable data.
        """
        return {
            'block_id': self.block_id,
            'block_type': type(self).__name__,
            'process_type': self.process_type.name,
            'last_result': self._last_result.to_dict() if self._last_result else None,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(block_id={self.block_id!r})"
