"""
Process results.

One immutable record per process family. A block produces a fresh result on
every run; results are never merged or updated in place.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple, Union

from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.stream import HumidAirFlow, LiquidWaterFlow
from hvac_engine.processes.coolant import CoolantData


@dataclass(frozen=True)
class HeatingResult:
    """Outcome of a heating process. Humidity ratio is unchanged."""
    process_mode: ProcessMode
    inlet_flow: HumidAirFlow
    outlet_flow: HumidAirFlow
    heat_of_process_w: float
    process_type: ClassVar[ProcessType] = ProcessType.HEATING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'process_type': self.process_type.name,
            'process_mode': self.process_mode.name,
            'heat_of_process_w': self.heat_of_process_w,
            'inlet_flow': self.inlet_flow.to_dict(),
            'outlet_flow': self.outlet_flow.to_dict(),
        }


@dataclass(frozen=True)
class DryCoolingResult:
    """Outcome of sensible cooling without condensation."""
    process_mode: ProcessMode
    inlet_flow: HumidAirFlow
    outlet_flow: HumidAirFlow
    heat_of_process_w: float
    process_type: ClassVar[ProcessType] = ProcessType.COOLING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'process_type': self.process_type.name,
            'process_mode': self.process_mode.name,
            'heat_of_process_w': self.heat_of_process_w,
            'inlet_flow': self.inlet_flow.to_dict(),
            'outlet_flow': self.outlet_flow.to_dict(),
        }


@dataclass(frozen=True)
class CoolingResult:
    """
    Outcome of cooling on a coil with condensate discharge.

    Attributes:
        heat_of_process_w: Heat added to the air, W (negative for cooling).
        condensate_flow: Water removed from the air, at coil wall temperature.
        bypass_factor: Fraction of dry air passing the coil unaffected, 0..1.
        coolant: Coolant temperatures the coil operated with.
    """
    process_mode: ProcessMode
    inlet_flow: HumidAirFlow
    outlet_flow: HumidAirFlow
    heat_of_process_w: float
    condensate_flow: LiquidWaterFlow
    bypass_factor: float
    coolant: CoolantData
    process_type: ClassVar[ProcessType] = ProcessType.COOLING

    def with_process_mode(self, process_mode: ProcessMode) -> 'CoolingResult':
        return CoolingResult(process_mode, self.inlet_flow, self.outlet_flow,
                             self.heat_of_process_w, self.condensate_flow,
                             self.bypass_factor, self.coolant)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'process_type': self.process_type.name,
            'process_mode': self.process_mode.name,
            'heat_of_process_w': self.heat_of_process_w,
            'bypass_factor': self.bypass_factor,
            'coolant': self.coolant.to_dict(),
            'condensate_flow': self.condensate_flow.to_dict(),
            'inlet_flow': self.inlet_flow.to_dict(),
            'outlet_flow': self.outlet_flow.to_dict(),
        }


@dataclass(frozen=True)
class MixingResult:
    """Outcome of adiabatic mixing of an inlet with recirculation flows."""
    process_mode: ProcessMode
    inlet_flow: HumidAirFlow
    outlet_flow: HumidAirFlow
    recirculation_flows: Tuple[HumidAirFlow, ...]
    heat_of_process_w: float = 0.0
    process_type: ClassVar[ProcessType] = ProcessType.MIXING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'process_type': self.process_type.name,
            'process_mode': self.process_mode.name,
            'heat_of_process_w': self.heat_of_process_w,
            'inlet_flow': self.inlet_flow.to_dict(),
            'recirculation_flows': [f.to_dict() for f in self.recirculation_flows],
            'outlet_flow': self.outlet_flow.to_dict(),
        }


ProcessResult = Union[HeatingResult, DryCoolingResult, CoolingResult, MixingResult]
