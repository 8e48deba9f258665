"""
Process Pipeline.

Ordered chain of process blocks. Each block added after the first has its
input connector wired to the output connector of the block before it, so a
run pulls the outlet of block *i-1* into block *i*.

Execution:
    1. The first block's inlet is resolved (``connect_inlet`` or a value set
       directly on the block).
    2. Blocks run strictly in insertion order.
    3. Every run starts a new results list; results are never merged with
       those of a previous run. The list is published only when every block
       has run, so a failed run leaves the previous results in place.

Not safe for concurrent use: a run mutates block connectors and the results
list without locking.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from hvac_engine.components.source import FlowSource
from hvac_engine.core.component import ProcessBlock
from hvac_engine.core.connector import OutputConnector
from hvac_engine.core.enums import ProcessType
from hvac_engine.core.exceptions import (
    BlockNotFoundError,
    DuplicateBlockError,
    PipelineUsageError,
)
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.results import ProcessResult

logger = logging.getLogger(__name__)


class ProcessPipeline:
    """
    Append-only sequence of process blocks.

    Example:
        >>> pipeline = ProcessPipeline('AHU-1')
        >>> pipeline.add_block(MixingBlock('mixing', [exhaust]))
        0
        >>> pipeline.add_block(CoolingBlock('coil', CoolantData(7, 14), Temperature(25.0)))
        1
        >>> pipeline.connect_inlet(outdoor)
        >>> pipeline.run().outlet_flow.temperature_c
        25.0
    """

    def __init__(self, name: str = "pipeline") -> None:
        self.name = name
        self._blocks: List[ProcessBlock] = []
        self._results: List[ProcessResult] = []
        self._inlet_connector: OutputConnector[HumidAirFlow] = OutputConnector()

    def add_block(self, block: ProcessBlock) -> int:
        """
        Append a block and wire it to the previous one.

        Returns:
            Index of the block in the pipeline.

        Raises:
            MissingArgumentError: If block is None.
            DuplicateBlockError: If a block with the same id is present.
        """
        require_not_none(block, "Process block")
        if any(b.block_id == block.block_id for b in self._blocks):
            raise DuplicateBlockError(
                f"Block '{block.block_id}' already present in pipeline '{self.name}'")

        if self._blocks:
            block.input_connector.connect(self._blocks[-1].output_connector)
        else:
            block.input_connector.connect(self._inlet_connector)
        self._blocks.append(block)

        index = len(self._blocks) - 1
        logger.debug(f"[{self.name}] added block #{index} '{block.block_id}' ({type(block).__name__})")
        return index

    def connect_inlet(self, inlet: Union[HumidAirFlow, FlowSource]) -> None:
        """
        Supply the inlet of the first block.

        A ``HumidAirFlow`` is stored as a fixed inlet; a ``FlowSource`` is
        connected so that later changes to the source are seen on the next run.
        """
        require_not_none(inlet, "Inlet flow")
        if not self._blocks:
            raise PipelineUsageError(
                f"Pipeline '{self.name}' has no blocks to receive an inlet flow")
        if isinstance(inlet, FlowSource):
            self._blocks[0].input_connector.connect(inlet.output_connector)
        else:
            self._blocks[0].input_connector.connect(self._inlet_connector)
            self._inlet_connector.set(inlet)

    def run(self) -> ProcessResult:
        """
        Run every block in order.

        Returns:
            Result of the last block.

        Raises:
            PipelineUsageError: If there are no blocks or no inlet flow.
            InvalidArgumentError: If a block target is inconsistent with its inlet.
            SolutionNotConvergedError: If an implicit block fails to converge.
        """
        if not self._blocks:
            raise PipelineUsageError("No process found. Cannot run calculations")
        if self._blocks[0].input_connector.pull() is None:
            raise PipelineUsageError("No inlet airflow data found. Cannot run calculations")

        logger.info(f"[{self.name}] running {len(self._blocks)} blocks")
        results: List[ProcessResult] = []
        for block in self._blocks:
            results.append(block.run())
        self._results = results

        final = results[-1]
        logger.info(
            f"[{self.name}] outlet {final.outlet_flow.temperature_c:.2f} degC, "
            f"{final.outlet_flow.relative_humidity_pct:.2f} % RH, "
            f"{final.outlet_flow.dry_air_mass_flow_kg_s:.4f} kg/s dry air")
        return final

    def results(self) -> Tuple[ProcessResult, ...]:
        return tuple(self._results)

    def results_of_type(self, kind: Union[ProcessType, Type]) -> Tuple[ProcessResult, ...]:
        """Results of one process family (``ProcessType``) or one result class."""
        if isinstance(kind, ProcessType):
            return tuple(r for r in self._results if r.process_type == kind)
        return tuple(r for r in self._results if isinstance(r, kind))

    def last_result(self) -> Optional[ProcessResult]:
        return self._results[-1] if self._results else None

    def get_block(self, block_id: str) -> ProcessBlock:
        for block in self._blocks:
            if block.block_id == block_id:
                return block
        raise BlockNotFoundError(f"Block '{block_id}' not found in pipeline '{self.name}'")

    @property
    def blocks(self) -> Tuple[ProcessBlock, ...]:
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def summary(self) -> List[Dict[str, Any]]:
        """One row per executed block with the key outlet values."""
        rows = []
        for block, result in zip(self._blocks, self._results):
            outlet = result.outlet_flow
            row = {
                'block_id': block.block_id,
                'process_type': result.process_type.name,
                'process_mode': result.process_mode.name,
                'inlet_temperature_c': result.inlet_flow.temperature_c,
                'outlet_temperature_c': outlet.temperature_c,
                'outlet_relative_humidity_pct': outlet.relative_humidity_pct,
                'outlet_humidity_ratio': outlet.humidity_ratio,
                'outlet_dry_air_mass_flow_kg_s': outlet.dry_air_mass_flow_kg_s,
                'heat_of_process_w': result.heat_of_process_w,
            }
            condensate = getattr(result, 'condensate_flow', None)
            if condensate is not None:
                row['condensate_mass_flow_kg_s'] = condensate.mass_flow_kg_s
            rows.append(row)
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'blocks': [block.get_state() for block in self._blocks],
            'summary': self.summary(),
        }
