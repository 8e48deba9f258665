"""
Heating Block.

Pipeline stage heating its inlet flow to a power, temperature or relative
humidity target. The humidity ratio passes through unchanged.

Architecture:
    Implements the process block contract:
    - `create_strategy()`: selects the heating variant from the target type.
    - `run()`: pulls the inlet, applies the strategy, publishes the outlet.
    - `get_state()`: block settings and last result.
"""

from typing import Any, Dict

from hvac_engine.core.component import ProcessBlock
from hvac_engine.core.enums import ProcessType
from hvac_engine.core.quantities import ProcessTarget, target_to_dict
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.heating import HeatingStrategy


class HeatingBlock(ProcessBlock):
    """
    Heater or reheater stage.

    Example:
        >>> heater = HeatingBlock('reheater', RelativeHumidity(30.0))
        >>> heater.set_inlet_flow(HumidAirFlow.of_values(20.0, 60.0, 1000.0))
        >>> heater.run().heat_of_process_w > 0
        True
    """

    process_type = ProcessType.HEATING

    def __init__(self, block_id: str, target: ProcessTarget) -> None:
        super().__init__(block_id)
        self.target = require_not_none(target, "Heating target")

    def create_strategy(self, inlet_flow: HumidAirFlow) -> HeatingStrategy:
        return HeatingStrategy.of(inlet_flow, self.target)

    def get_state(self) -> Dict[str, Any]:
        return {**super().get_state(), 'target': target_to_dict(self.target)}
