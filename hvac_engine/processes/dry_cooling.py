"""
Sensible (dry) cooling of humid air.

The humidity ratio stays constant, so the outlet may not go below the inlet
dew point. The power variant also provides the lowest temperature a given
cooling power can reach, which bounds the search of real coil cooling.
"""

import logging
from typing import Union

from hvac_engine.core.constants import HumidAirLimits
from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.quantities import Power, Temperature
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.base import ProcessStrategy
from hvac_engine.processes.results import DryCoolingResult
from hvac_engine.properties import humid_air

logger = logging.getLogger(__name__)


def dry_cooling_from_power(inlet_flow: HumidAirFlow, power_w: float) -> DryCoolingResult:
    """Outlet of sensible cooling by ``power_w`` (<= 0) W."""
    mda = inlet_flow.dry_air_mass_flow_kg_s
    if power_w == 0.0 or mda == 0.0:
        return DryCoolingResult(ProcessMode.FROM_POWER, inlet_flow, inlet_flow, power_w)

    state = inlet_flow.state
    i_out = state.specific_enthalpy_kj_kg + power_w / 1000.0 / mda
    t_out = humid_air.dry_bulb_from_enthalpy(i_out, state.humidity_ratio, state.pressure_pa)
    outlet_flow = inlet_flow.with_state(state.with_temperature(t_out))
    logger.debug(f"Dry cooling by {power_w:.1f} W: {state.temperature_c:.3f} -> {t_out:.3f} degC")
    return DryCoolingResult(ProcessMode.FROM_POWER, inlet_flow, outlet_flow, power_w)


def dry_cooling_from_temperature(inlet_flow: HumidAirFlow, temperature_c: float) -> DryCoolingResult:
    state = inlet_flow.state
    outlet_flow = inlet_flow.with_state(state.with_temperature(temperature_c))
    heat_w = (inlet_flow.dry_air_mass_flow_kg_s
              * (outlet_flow.specific_enthalpy_kj_kg - state.specific_enthalpy_kj_kg) * 1000.0)
    return DryCoolingResult(ProcessMode.FROM_TEMPERATURE, inlet_flow, outlet_flow, heat_w)


def dry_cooling_power_limit_w(inlet_flow: HumidAirFlow) -> float:
    """Most negative power that keeps the outlet at or above the dew point, W."""
    state = inlet_flow.state
    t_floor = max(state.dew_point_c, HumidAirLimits.TEMPERATURE_MIN_C)
    if t_floor >= state.temperature_c:
        return 0.0
    i_dew = humid_air.specific_enthalpy(t_floor, state.humidity_ratio, state.pressure_pa)
    return (i_dew - state.specific_enthalpy_kj_kg) * inlet_flow.dry_air_mass_flow_kg_s * 1000.0


class DryCoolingStrategy(ProcessStrategy):
    """Base of the dry cooling variants; use ``DryCoolingStrategy.of`` to select one."""

    process_type = ProcessType.COOLING

    @staticmethod
    def of(inlet_flow: HumidAirFlow, target: Union[Power, Temperature]) -> 'DryCoolingStrategy':
        require_not_none(target, "Dry cooling target")
        if isinstance(target, Power):
            return DryCoolingFromPower(inlet_flow, target)
        if isinstance(target, Temperature):
            return DryCoolingFromTemperature(inlet_flow, target)
        raise InvalidArgumentError(f"Unsupported dry cooling target: {target!r}")


class DryCoolingFromPower(DryCoolingStrategy):
    process_mode = ProcessMode.FROM_POWER

    def __init__(self, inlet_flow: HumidAirFlow, power: Power):
        super().__init__(inlet_flow)
        require_not_none(power, "Cooling power")
        if power.watts > 0.0:
            raise InvalidArgumentError(
                f"Cooling power must be a negative value. Q_in = {power.watts} W")
        limit_w = dry_cooling_power_limit_w(inlet_flow)
        if power.watts < limit_w:
            raise InvalidArgumentError(
                f"Dry cooling power would cool the air below its dew point. "
                f"Q_in = {power.watts:.1f} W, Q_limit = {limit_w:.1f} W")
        self.power = power

    def apply(self) -> DryCoolingResult:
        return dry_cooling_from_power(self.inlet_flow, self.power.watts)


class DryCoolingFromTemperature(DryCoolingStrategy):
    process_mode = ProcessMode.FROM_TEMPERATURE

    def __init__(self, inlet_flow: HumidAirFlow, temperature: Temperature):
        super().__init__(inlet_flow)
        require_not_none(temperature, "Dry cooling target temperature")
        t_in = inlet_flow.temperature_c
        if temperature.celsius > t_in:
            raise InvalidArgumentError(
                f"Temperature cannot be increased in a cooling process. "
                f"DBT_in = {t_in} degC, DBT_target = {temperature.celsius} degC")
        t_dew = inlet_flow.state.dew_point_c
        if temperature.celsius < t_dew:
            raise InvalidArgumentError(
                f"Dry cooling target {temperature.celsius} degC is below the dew point "
                f"{t_dew:.3f} degC")
        self.temperature = temperature

    def apply(self) -> DryCoolingResult:
        return dry_cooling_from_temperature(self.inlet_flow, self.temperature.celsius)
