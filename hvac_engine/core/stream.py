"""
Immutable humid air states and flows.

Represents the values exchanged between process blocks:
- HumidAirState: pressure (Pa), dry bulb temperature (degC), humidity ratio
  (kg/kg) plus every property derived from them
- HumidAirFlow: a state carried at a moist air mass flow (kg/s), with the
  derived volumetric flow and dry air mass flow
- LiquidWaterFlow: condensate leaving a cooling coil

Every "modification" returns a new instance. Derived fields are computed once
at construction; dew point and wet bulb need a root solve and are computed on
first access.
"""

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict

from hvac_engine.core.constants import FlowLimits, HumidAirLimits, StandardConditions
from hvac_engine.core.enums import VapourStatus
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.validators import require_between, require_not_none
from hvac_engine.properties import humid_air, liquid_water


def _vapour_status(temperature_c: float, x: float, x_max: float) -> VapourStatus:
    if math.isclose(x, x_max, rel_tol=1e-12, abs_tol=0.0):
        return VapourStatus.SATURATED
    if x > x_max:
        return VapourStatus.WATER_FOG if temperature_c > 0.0 else VapourStatus.ICE_FOG
    return VapourStatus.UNSATURATED


@dataclass(frozen=True)
class HumidAirState:
    """
    Thermodynamic state of humid air.

    Args:
        pressure_pa: Absolute pressure, Pa.
        temperature_c: Dry bulb temperature, degC.
        humidity_ratio: Mass of water per mass of dry air, kg/kg.

    Raises:
        MissingArgumentError: If any argument is None.
        InvalidArgumentError: If a value is outside the humid air domain or
            the saturation pressure is not below the absolute pressure.

    Example:
        >>> state = HumidAirState.from_relative_humidity(25.0, 50.0)
        >>> round(state.relative_humidity_pct, 6)
        50.0
    """
    pressure_pa: float
    temperature_c: float
    humidity_ratio: float
    saturation_pressure_pa: float = field(init=False, repr=False, compare=False)
    max_humidity_ratio: float = field(init=False, repr=False, compare=False)
    relative_humidity_pct: float = field(init=False, repr=False, compare=False)
    specific_enthalpy_kj_kg: float = field(init=False, repr=False, compare=False)
    density_kg_m3: float = field(init=False, repr=False, compare=False)
    vapour_status: VapourStatus = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        require_between(self.pressure_pa, HumidAirLimits.PRESSURE_MIN_PA,
                        HumidAirLimits.PRESSURE_MAX_PA, "Pressure", "Pa")
        require_between(self.temperature_c, HumidAirLimits.TEMPERATURE_MIN_C,
                        HumidAirLimits.TEMPERATURE_MAX_C, "Temperature", "degC")
        require_between(self.humidity_ratio, 0.0, HumidAirLimits.HUMIDITY_RATIO_MAX,
                        "Humidity ratio", "kg/kg")

        ps = humid_air.saturation_pressure(self.temperature_c)
        _require_valid_saturation_pressure(ps, self.pressure_pa, self.temperature_c)
        x_max = humid_air.max_humidity_ratio(ps, self.pressure_pa)

        object.__setattr__(self, 'saturation_pressure_pa', ps)
        object.__setattr__(self, 'max_humidity_ratio', x_max)
        object.__setattr__(self, 'relative_humidity_pct', humid_air.relative_humidity(
            self.temperature_c, self.humidity_ratio, self.pressure_pa))
        object.__setattr__(self, 'specific_enthalpy_kj_kg', humid_air.specific_enthalpy(
            self.temperature_c, self.humidity_ratio, self.pressure_pa))
        object.__setattr__(self, 'density_kg_m3', humid_air.density(
            self.temperature_c, self.humidity_ratio, self.pressure_pa))
        object.__setattr__(self, 'vapour_status', _vapour_status(
            self.temperature_c, self.humidity_ratio, x_max))

    @cached_property
    def dew_point_c(self) -> float:
        """Dew point temperature, degC (-inf for dry air)."""
        return humid_air.dew_point_temperature(
            self.temperature_c, self.relative_humidity_pct, self.pressure_pa)

    @cached_property
    def wet_bulb_c(self) -> float:
        """Wet bulb temperature, degC."""
        return humid_air.wet_bulb_temperature(
            self.temperature_c, self.relative_humidity_pct, self.pressure_pa)

    @property
    def specific_heat_kj_kg_k(self) -> float:
        return humid_air.specific_heat(self.temperature_c, self.humidity_ratio)

    @classmethod
    def from_relative_humidity(cls, temperature_c: float, relative_humidity_pct: float,
                               pressure_pa: float = StandardConditions.PRESSURE_PA) -> 'HumidAirState':
        """Build a state from dry bulb temperature and relative humidity [%]."""
        require_between(relative_humidity_pct, 0.0,
                        HumidAirLimits.RELATIVE_HUMIDITY_MAX_PCT, "Relative humidity", "%")
        require_between(temperature_c, HumidAirLimits.TEMPERATURE_MIN_C,
                        HumidAirLimits.TEMPERATURE_MAX_C, "Temperature", "degC")
        require_not_none(pressure_pa, "Pressure")
        ps = humid_air.saturation_pressure(temperature_c)
        _require_valid_saturation_pressure(ps, pressure_pa, temperature_c)
        x = humid_air.humidity_ratio(relative_humidity_pct, ps, pressure_pa)
        return cls(pressure_pa, temperature_c, x)

    def with_temperature(self, temperature_c: float) -> 'HumidAirState':
        return HumidAirState(self.pressure_pa, temperature_c, self.humidity_ratio)

    def with_humidity_ratio(self, humidity_ratio: float) -> 'HumidAirState':
        return HumidAirState(self.pressure_pa, self.temperature_c, humidity_ratio)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pressure_pa': self.pressure_pa,
            'temperature_c': self.temperature_c,
            'humidity_ratio': self.humidity_ratio,
            'relative_humidity_pct': self.relative_humidity_pct,
            'specific_enthalpy_kj_kg': self.specific_enthalpy_kj_kg,
            'density_kg_m3': self.density_kg_m3,
            'vapour_status': self.vapour_status.name,
        }


def _require_valid_saturation_pressure(ps: float, pressure_pa: float,
                                       temperature_c: float) -> None:
    if ps >= pressure_pa:
        raise InvalidArgumentError(
            f"Saturation pressure {ps:.1f} Pa at {temperature_c} degC must be lower "
            f"than the absolute pressure {pressure_pa:.1f} Pa"
        )


@dataclass(frozen=True)
class HumidAirFlow:
    """
    Humid air state carried at a moist air mass flow.

    Args:
        state: Thermodynamic state of the air.
        mass_flow_kg_s: Moist air mass flow, kg/s.

    Derived:
        volumetric_flow_m3_s = mass_flow / density
        dry_air_mass_flow_kg_s = mass_flow / (1 + x)
    """
    state: HumidAirState
    mass_flow_kg_s: float
    volumetric_flow_m3_s: float = field(init=False, repr=False, compare=False)
    dry_air_mass_flow_kg_s: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        require_not_none(self.state, "Humid air state")
        _require_mass_flow(self.mass_flow_kg_s, "Mass flow")
        object.__setattr__(self, 'volumetric_flow_m3_s',
                           self.mass_flow_kg_s / self.state.density_kg_m3)
        object.__setattr__(self, 'dry_air_mass_flow_kg_s',
                           self.mass_flow_kg_s / (1.0 + self.state.humidity_ratio))

    # Convenience accessors
    @property
    def temperature_c(self) -> float:
        return self.state.temperature_c

    @property
    def pressure_pa(self) -> float:
        return self.state.pressure_pa

    @property
    def humidity_ratio(self) -> float:
        return self.state.humidity_ratio

    @property
    def relative_humidity_pct(self) -> float:
        return self.state.relative_humidity_pct

    @property
    def specific_enthalpy_kj_kg(self) -> float:
        return self.state.specific_enthalpy_kj_kg

    @property
    def mass_flow_kg_h(self) -> float:
        return self.mass_flow_kg_s * 3600.0

    @property
    def volumetric_flow_m3_h(self) -> float:
        return self.volumetric_flow_m3_s * 3600.0

    # Factories
    @classmethod
    def from_volumetric_flow(cls, state: HumidAirState, volumetric_flow_m3_s: float) -> 'HumidAirFlow':
        require_not_none(state, "Humid air state")
        _require_mass_flow(volumetric_flow_m3_s, "Volumetric flow")
        return cls(state, volumetric_flow_m3_s * state.density_kg_m3)

    @classmethod
    def from_dry_air_mass_flow(cls, state: HumidAirState, dry_air_mass_flow_kg_s: float) -> 'HumidAirFlow':
        require_not_none(state, "Humid air state")
        _require_mass_flow(dry_air_mass_flow_kg_s, "Dry air mass flow")
        return cls(state, dry_air_mass_flow_kg_s * (1.0 + state.humidity_ratio))

    @classmethod
    def of_values(cls, temperature_c: float, relative_humidity_pct: float,
                  volumetric_flow_m3_h: float,
                  pressure_pa: float = StandardConditions.PRESSURE_PA) -> 'HumidAirFlow':
        """
        Build a flow from field units.

        Example:
            >>> flow = HumidAirFlow.of_values(35.0, 55.0, 1000.0)
            >>> round(flow.volumetric_flow_m3_h, 6)
            1000.0
        """
        state = HumidAirState.from_relative_humidity(
            temperature_c, relative_humidity_pct, pressure_pa)
        require_not_none(volumetric_flow_m3_h, "Volumetric flow")
        return cls.from_volumetric_flow(state, volumetric_flow_m3_h / 3600.0)

    def with_mass_flow(self, mass_flow_kg_s: float) -> 'HumidAirFlow':
        return HumidAirFlow(self.state, mass_flow_kg_s)

    def with_dry_air_mass_flow(self, dry_air_mass_flow_kg_s: float) -> 'HumidAirFlow':
        return HumidAirFlow.from_dry_air_mass_flow(self.state, dry_air_mass_flow_kg_s)

    def with_state(self, state: HumidAirState) -> 'HumidAirFlow':
        """Replace the state, keeping the dry air mass flow."""
        return HumidAirFlow.from_dry_air_mass_flow(state, self.dry_air_mass_flow_kg_s)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.state.to_dict(),
            'mass_flow_kg_s': self.mass_flow_kg_s,
            'dry_air_mass_flow_kg_s': self.dry_air_mass_flow_kg_s,
            'volumetric_flow_m3_h': self.volumetric_flow_m3_h,
        }


@dataclass(frozen=True)
class LiquidWaterFlow:
    """Liquid water stream, e.g. condensate discharged by a cooling coil."""
    temperature_c: float
    mass_flow_kg_s: float

    def __post_init__(self):
        require_not_none(self.temperature_c, "Water temperature")
        _require_mass_flow(self.mass_flow_kg_s, "Water mass flow")

    @property
    def specific_enthalpy_kj_kg(self) -> float:
        return liquid_water.specific_enthalpy(self.temperature_c)

    @property
    def density_kg_m3(self) -> float:
        return liquid_water.density(self.temperature_c)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'temperature_c': self.temperature_c,
            'mass_flow_kg_s': self.mass_flow_kg_s,
            'specific_enthalpy_kj_kg': self.specific_enthalpy_kj_kg,
        }


def _require_mass_flow(value: float, name: str) -> None:
    require_between(value, FlowLimits.MASS_FLOW_MIN_KG_S,
                    FlowLimits.MASS_FLOW_CEILING_KG_S, name)
