"""
Cooling Blocks.

``CoolingBlock`` models a chilled water coil with condensate discharge and a
bypass factor. ``DryCoolingBlock`` models sensible cooling that never reaches
the dew point, e.g. a recuperator on the supply side.

Architecture:
    Implements the process block contract:
    - `create_strategy()`: selects the cooling variant from the target type.
    - `run()`: pulls the inlet, applies the strategy, publishes the outlet.
    - `get_state()`: block settings, coolant and last result.
"""

from typing import Any, Dict, Optional, Union

from hvac_engine.core.component import ProcessBlock
from hvac_engine.core.enums import ProcessType
from hvac_engine.core.quantities import Power, ProcessTarget, Temperature, target_to_dict
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.coolant import CoolantData
from hvac_engine.processes.cooling import CoolingStrategy
from hvac_engine.processes.dry_cooling import DryCoolingStrategy
from hvac_engine.solver.root_finder import BrentRootFinder


class CoolingBlock(ProcessBlock):
    """
    Cooling coil stage.

    Attributes:
        coolant (CoolantData): Supply/return coolant temperatures; the coil
            wall sits at their mean.
        target: Power (W, negative), Temperature or RelativeHumidity target.
        solver (BrentRootFinder): Root finder settings for the implicit
            variants, shared by every run of this block.

    Example:
        >>> coil = CoolingBlock('coil', CoolantData(7.0, 14.0), Temperature(25.0))
        >>> coil.set_inlet_flow(HumidAirFlow.of_values(30.0, 60.0, 2000.0))
        >>> result = coil.run()
        >>> result.condensate_flow.mass_flow_kg_s >= 0.0
        True
    """

    process_type = ProcessType.COOLING

    def __init__(self, block_id: str, coolant: CoolantData, target: ProcessTarget,
                 solver: Optional[BrentRootFinder] = None) -> None:
        super().__init__(block_id)
        self.coolant = require_not_none(coolant, "Coolant data")
        self.target = require_not_none(target, "Cooling target")
        self.solver = solver

    def create_strategy(self, inlet_flow: HumidAirFlow) -> CoolingStrategy:
        return CoolingStrategy.of(inlet_flow, self.coolant, self.target, self.solver)

    def get_state(self) -> Dict[str, Any]:
        return {
            **super().get_state(),
            'target': target_to_dict(self.target),
            'coolant': self.coolant.to_dict(),
        }


class DryCoolingBlock(ProcessBlock):
    """Sensible cooling stage without condensation."""

    process_type = ProcessType.COOLING

    def __init__(self, block_id: str, target: Union[Power, Temperature]) -> None:
        super().__init__(block_id)
        self.target = require_not_none(target, "Dry cooling target")

    def create_strategy(self, inlet_flow: HumidAirFlow) -> DryCoolingStrategy:
        return DryCoolingStrategy.of(inlet_flow, self.target)

    def get_state(self) -> Dict[str, Any]:
        return {**super().get_state(), 'target': target_to_dict(self.target)}
