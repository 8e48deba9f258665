"""
Configuration dataclasses for process pipelines.

Plain data mirroring the YAML/JSON layout, each with a ``validate()`` method
raising ValueError. Conversion to flows and blocks is done by
``PipelineBuilder``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from hvac_engine.core.constants import SolverDefaults, StandardConditions


BLOCK_TYPES = ('heating', 'cooling', 'dry_cooling', 'mixing', 'mixing_to_temperature')


@dataclass
class SolverConfig:
    """Root finder settings applied to every implicit block."""
    accuracy: float = SolverDefaults.ACCURACY
    max_iterations: int = SolverDefaults.MAX_ITERATIONS
    bracket_search_cycles: int = SolverDefaults.BRACKET_SEARCH_CYCLES

    def validate(self) -> None:
        if self.accuracy <= 0:
            raise ValueError(f"Solver accuracy must be positive, got {self.accuracy}")
        if self.max_iterations < 1:
            raise ValueError(f"Solver max_iterations must be >= 1, got {self.max_iterations}")
        if self.bracket_search_cycles < 0:
            raise ValueError(
                f"Solver bracket_search_cycles must be >= 0, got {self.bracket_search_cycles}")


@dataclass
class FlowConfig:
    """Humid air flow given by field units. Exactly one flow rate is set."""
    temperature_c: float
    relative_humidity_pct: float
    volumetric_flow_m3_h: Optional[float] = None
    mass_flow_kg_s: Optional[float] = None
    pressure_pa: float = StandardConditions.PRESSURE_PA

    def validate(self) -> None:
        if not 0.0 <= self.relative_humidity_pct <= 100.0:
            raise ValueError(
                f"Relative humidity must be in [0, 100] %, got {self.relative_humidity_pct}")
        rates = [r for r in (self.volumetric_flow_m3_h, self.mass_flow_kg_s) if r is not None]
        if len(rates) != 1:
            raise ValueError("Exactly one of volumetric_flow_m3_h or mass_flow_kg_s must be set")
        if rates[0] < 0:
            raise ValueError(f"Flow rate cannot be negative, got {rates[0]}")
        if self.pressure_pa <= 0:
            raise ValueError(f"Pressure must be positive, got {self.pressure_pa}")


@dataclass
class CoolantConfig:
    """Coil coolant supply and return temperatures."""
    supply_temperature_c: float
    return_temperature_c: float

    def validate(self) -> None:
        if self.supply_temperature_c > self.return_temperature_c:
            raise ValueError(
                f"Coolant supply {self.supply_temperature_c} degC must not exceed "
                f"return {self.return_temperature_c} degC")


@dataclass
class TargetConfig:
    """Process target; exactly one field is set."""
    power_w: Optional[float] = None
    temperature_c: Optional[float] = None
    relative_humidity_pct: Optional[float] = None

    @property
    def kind(self) -> str:
        if self.power_w is not None:
            return 'power'
        if self.temperature_c is not None:
            return 'temperature'
        return 'relative_humidity'

    def validate(self) -> None:
        values = [self.power_w, self.temperature_c, self.relative_humidity_pct]
        if sum(v is not None for v in values) != 1:
            raise ValueError(
                "Target must set exactly one of power_w, temperature_c, relative_humidity_pct")


@dataclass
class BlockConfig:
    """One pipeline stage."""
    id: str
    type: str
    target: Optional[TargetConfig] = None
    coolant: Optional[CoolantConfig] = None
    recirculation: List[FlowConfig] = field(default_factory=list)
    dry_air_mass_flow_kg_s: Optional[float] = None
    min_inlet_dry_air_kg_s: float = 0.0
    min_recirculation_dry_air_kg_s: float = 0.0

    def validate(self) -> None:
        if not self.id:
            raise ValueError("Block id must be specified")
        if self.type not in BLOCK_TYPES:
            raise ValueError(f"Block '{self.id}': unknown type '{self.type}', expected one of {BLOCK_TYPES}")

        if self.type in ('heating', 'cooling', 'dry_cooling', 'mixing_to_temperature'):
            if self.target is None:
                raise ValueError(f"Block '{self.id}' ({self.type}) requires a target")
            self.target.validate()
        if self.type == 'cooling':
            if self.coolant is None:
                raise ValueError(f"Block '{self.id}' (cooling) requires coolant temperatures")
            self.coolant.validate()
        if self.type == 'dry_cooling' and self.target.kind == 'relative_humidity':
            raise ValueError(f"Block '{self.id}' (dry_cooling) accepts power or temperature targets only")
        if self.type == 'mixing':
            if not self.recirculation:
                raise ValueError(f"Block '{self.id}' (mixing) requires at least one recirculation flow")
        if self.type == 'mixing_to_temperature':
            if self.target.kind != 'temperature':
                raise ValueError(f"Block '{self.id}' (mixing_to_temperature) requires a temperature target")
            if len(self.recirculation) != 1:
                raise ValueError(
                    f"Block '{self.id}' (mixing_to_temperature) requires exactly one recirculation flow")
            if self.min_inlet_dry_air_kg_s < 0 or self.min_recirculation_dry_air_kg_s < 0:
                raise ValueError(f"Block '{self.id}': minimum dry air flows cannot be negative")
        for flow in self.recirculation:
            flow.validate()


@dataclass
class PipelineConfig:
    """Top-level pipeline configuration."""
    name: str
    inlet: FlowConfig
    blocks: List[BlockConfig]
    version: str = "1.0"
    solver: SolverConfig = field(default_factory=SolverConfig)

    def validate(self) -> None:
        if not self.blocks:
            raise ValueError("Pipeline must contain at least one block")
        ids = [b.id for b in self.blocks]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate block ids: {duplicates}")
        self.inlet.validate()
        self.solver.validate()
        for block in self.blocks:
            block.validate()
