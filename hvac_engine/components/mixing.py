"""
Mixing Blocks.

``MixingBlock`` mixes its inlet with one or more recirculation streams as
they come. ``MixingToTemperatureBlock`` adjusts the split between its inlet
and a single recirculation stream to reach a target outlet temperature.

Recirculation streams are held in their own input connectors, so they can be
fixed flows or the outputs of other blocks or ``FlowSource`` objects.
"""

from typing import Any, Dict, List, Optional, Sequence

from hvac_engine.core.component import ProcessBlock
from hvac_engine.core.connector import InputConnector, OutputConnector
from hvac_engine.core.enums import ProcessType
from hvac_engine.core.exceptions import PipelineUsageError
from hvac_engine.core.quantities import Temperature
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.mixing import MixingStrategy, MixingToTemperature
from hvac_engine.solver.root_finder import BrentRootFinder


class _RecirculationMixin:
    """Recirculation input connectors shared by the mixing blocks."""

    block_id: str
    recirculation_connectors: List[InputConnector[HumidAirFlow]]

    def add_recirculation_flow(self, flow: HumidAirFlow) -> InputConnector[HumidAirFlow]:
        """Add a fixed recirculation stream."""
        connector: InputConnector[HumidAirFlow] = InputConnector(
            require_not_none(flow, "Recirculation flow"))
        self.recirculation_connectors.append(connector)
        return connector

    def connect_recirculation(self, upstream: OutputConnector[HumidAirFlow]) -> InputConnector[HumidAirFlow]:
        """Add a recirculation stream read from an upstream output connector."""
        connector: InputConnector[HumidAirFlow] = InputConnector()
        connector.connect(require_not_none(upstream, "Recirculation connector"))
        self.recirculation_connectors.append(connector)
        return connector

    def _pull_recirculation(self) -> List[HumidAirFlow]:
        flows = [connector.pull() for connector in self.recirculation_connectors]
        if any(flow is None for flow in flows):
            raise PipelineUsageError(
                f"Block '{self.block_id}' has no value on one of its "
                f"{len(flows)} recirculation connectors")
        return flows


class MixingBlock(_RecirculationMixin, ProcessBlock):
    """
    Mixing box for an inlet and any number of recirculation streams.

    One recirculation stream selects two-flow mixing at the inlet pressure,
    more select multiple-flow mixing at the highest pressure. Without any
    recirculation stream the inlet passes through unchanged.
    """

    process_type = ProcessType.MIXING

    def __init__(self, block_id: str,
                 recirculation_flows: Optional[Sequence[HumidAirFlow]] = None) -> None:
        super().__init__(block_id)
        self.recirculation_connectors = []
        for flow in recirculation_flows or ():
            self.add_recirculation_flow(flow)

    def create_strategy(self, inlet_flow: HumidAirFlow) -> MixingStrategy:
        flows = self._pull_recirculation()
        return MixingStrategy.of(inlet_flow, flows[0] if len(flows) == 1 else flows)

    def get_state(self) -> Dict[str, Any]:
        return {
            **super().get_state(),
            'recirculation_streams': len(self.recirculation_connectors),
        }


class MixingToTemperatureBlock(_RecirculationMixin, ProcessBlock):
    """
    Mixing box controlled to an outlet temperature.

    Args:
        block_id: Block identifier.
        temperature: Target outlet temperature.
        recirculation_flow: Fixed recirculation stream; use
            ``connect_recirculation`` instead to read it from a connector.
        dry_air_mass_flow_kg_s: Total outlet dry air flow, defaults to the sum
            of both streams.
        min_inlet_dry_air_kg_s: Minimum dry air kept on the inlet stream.
        min_recirculation_dry_air_kg_s: Minimum dry air kept on the
            recirculation stream.
        solver: Root finder settings.
    """

    process_type = ProcessType.MIXING

    def __init__(self, block_id: str, temperature: Temperature,
                 recirculation_flow: Optional[HumidAirFlow] = None,
                 dry_air_mass_flow_kg_s: Optional[float] = None,
                 min_inlet_dry_air_kg_s: float = 0.0,
                 min_recirculation_dry_air_kg_s: float = 0.0,
                 solver: Optional[BrentRootFinder] = None) -> None:
        super().__init__(block_id)
        self.target = require_not_none(temperature, "Mixing target temperature")
        self.dry_air_mass_flow_kg_s = dry_air_mass_flow_kg_s
        self.min_inlet_dry_air_kg_s = min_inlet_dry_air_kg_s
        self.min_recirculation_dry_air_kg_s = min_recirculation_dry_air_kg_s
        self.solver = solver
        self.recirculation_connectors = []
        if recirculation_flow is not None:
            self.add_recirculation_flow(recirculation_flow)

    def create_strategy(self, inlet_flow: HumidAirFlow) -> MixingToTemperature:
        flows = self._pull_recirculation()
        if len(flows) != 1:
            raise PipelineUsageError(
                f"Block '{self.block_id}' mixes to temperature with exactly one "
                f"recirculation stream, got {len(flows)}")
        return MixingToTemperature(
            inlet_flow, flows[0], self.target,
            dry_air_mass_flow_kg_s=self.dry_air_mass_flow_kg_s,
            min_inlet_dry_air_kg_s=self.min_inlet_dry_air_kg_s,
            min_recirculation_dry_air_kg_s=self.min_recirculation_dry_air_kg_s,
            solver=self.solver,
        )

    def get_state(self) -> Dict[str, Any]:
        return {
            **super().get_state(),
            'target': {'kind': 'temperature', 'value': self.target.celsius, 'units': 'degC'},
            'dry_air_mass_flow_kg_s': self.dry_air_mass_flow_kg_s,
            'min_inlet_dry_air_kg_s': self.min_inlet_dry_air_kg_s,
            'min_recirculation_dry_air_kg_s': self.min_recirculation_dry_air_kg_s,
        }
