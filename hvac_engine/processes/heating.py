"""
Sensible heating of humid air.

Heating never changes the humidity ratio; the dry air mass flow is carried
through unchanged. Three variants are available, selected by target type:

- ``Power``: outlet enthalpy from the energy balance, temperature by inverting
  the enthalpy relation.
- ``Temperature``: heat from the enthalpy rise to the target temperature.
- ``RelativeHumidity``: outlet temperature at which the inlet humidity ratio
  reaches the target RH, then as above.

All variants are explicit; no iteration beyond the property inversions.
"""

import logging
from typing import Union

from hvac_engine.core.constants import HumidAirLimits, ProcessLimits
from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.quantities import Power, RelativeHumidity, Temperature
from hvac_engine.core.stream import HumidAirFlow
from hvac_engine.core.validators import require_not_none
from hvac_engine.processes.base import ProcessStrategy
from hvac_engine.processes.results import HeatingResult
from hvac_engine.properties import humid_air

logger = logging.getLogger(__name__)


def max_heating_temperature(inlet_flow: HumidAirFlow) -> float:
    """Highest outlet temperature accepted for heating at the flow pressure, degC."""
    t_boiling = humid_air.max_dry_bulb_temperature(inlet_flow.pressure_pa)
    return min(HumidAirLimits.TEMPERATURE_MAX_C,
               ProcessLimits.HEATING_TEMPERATURE_FRACTION * t_boiling)


def heating_power_limit_w(inlet_flow: HumidAirFlow) -> float:
    """Heat needed to bring the flow to ``max_heating_temperature``, W."""
    state = inlet_flow.state
    i_limit = humid_air.specific_enthalpy(max_heating_temperature(inlet_flow),
                                          state.humidity_ratio, state.pressure_pa)
    return (i_limit - state.specific_enthalpy_kj_kg) * inlet_flow.dry_air_mass_flow_kg_s * 1000.0


def heating_from_power(inlet_flow: HumidAirFlow, power_w: float) -> HeatingResult:
    """Outlet state for a given heat input, W."""
    mda = inlet_flow.dry_air_mass_flow_kg_s
    if power_w == 0.0 or mda == 0.0:
        return HeatingResult(ProcessMode.FROM_POWER, inlet_flow, inlet_flow, power_w)

    state = inlet_flow.state
    i_out = state.specific_enthalpy_kj_kg + power_w / 1000.0 / mda
    t_out = humid_air.dry_bulb_from_enthalpy(i_out, state.humidity_ratio, state.pressure_pa)
    outlet_flow = inlet_flow.with_state(state.with_temperature(t_out))
    logger.debug(f"Heating by {power_w:.1f} W: {state.temperature_c:.3f} -> {t_out:.3f} degC")
    return HeatingResult(ProcessMode.FROM_POWER, inlet_flow, outlet_flow, power_w)


def heating_from_temperature(inlet_flow: HumidAirFlow, temperature_c: float) -> HeatingResult:
    """Heat required to reach the outlet temperature, W."""
    state = inlet_flow.state
    outlet_flow = inlet_flow.with_state(state.with_temperature(temperature_c))
    heat_w = (inlet_flow.dry_air_mass_flow_kg_s
              * (outlet_flow.specific_enthalpy_kj_kg - state.specific_enthalpy_kj_kg) * 1000.0)
    return HeatingResult(ProcessMode.FROM_TEMPERATURE, inlet_flow, outlet_flow, heat_w)


def heating_from_relative_humidity(inlet_flow: HumidAirFlow, relative_humidity_pct: float) -> HeatingResult:
    """Heat required to lower the relative humidity to the target, W."""
    state = inlet_flow.state
    if relative_humidity_pct == state.relative_humidity_pct:
        return HeatingResult(ProcessMode.FROM_HUMIDITY, inlet_flow, inlet_flow, 0.0)

    t_out = humid_air.dry_bulb_from_humidity_ratio_and_rh(
        state.humidity_ratio, relative_humidity_pct, state.pressure_pa)
    result = heating_from_temperature(inlet_flow, t_out)
    logger.debug(f"Heating to RH {relative_humidity_pct:.2f} %: outlet {t_out:.3f} degC, "
                 f"Q = {result.heat_of_process_w:.1f} W")
    return HeatingResult(ProcessMode.FROM_HUMIDITY, inlet_flow, result.outlet_flow,
                         result.heat_of_process_w)


class HeatingStrategy(ProcessStrategy):
    """Base of the heating variants; use ``HeatingStrategy.of`` to select one."""

    process_type = ProcessType.HEATING

    @staticmethod
    def of(inlet_flow: HumidAirFlow,
           target: Union[Power, Temperature, RelativeHumidity]) -> 'HeatingStrategy':
        """
        Select the heating variant matching the target type.

        Example:
            >>> strategy = HeatingStrategy.of(flow, Temperature(30.0))
            >>> result = strategy.apply()
        """
        require_not_none(target, "Heating target")
        if isinstance(target, Power):
            return HeatingFromPower(inlet_flow, target)
        if isinstance(target, Temperature):
            return HeatingFromTemperature(inlet_flow, target)
        if isinstance(target, RelativeHumidity):
            return HeatingFromRelativeHumidity(inlet_flow, target)
        raise InvalidArgumentError(f"Unsupported heating target: {target!r}")


class HeatingFromPower(HeatingStrategy):
    process_mode = ProcessMode.FROM_POWER

    def __init__(self, inlet_flow: HumidAirFlow, power: Power):
        super().__init__(inlet_flow)
        require_not_none(power, "Heating power")
        if power.watts < 0.0:
            raise InvalidArgumentError(
                f"Heating power must not be negative. Q_in = {power.watts} W")
        limit_w = heating_power_limit_w(inlet_flow)
        if power.watts > limit_w:
            raise InvalidArgumentError(
                f"Heating power too large for the provided flow. "
                f"Q_in = {power.watts:.1f} W, Q_limit = {limit_w:.1f} W")
        self.power = power

    def apply(self) -> HeatingResult:
        return heating_from_power(self.inlet_flow, self.power.watts)


class HeatingFromTemperature(HeatingStrategy):
    process_mode = ProcessMode.FROM_TEMPERATURE

    def __init__(self, inlet_flow: HumidAirFlow, temperature: Temperature):
        super().__init__(inlet_flow)
        require_not_none(temperature, "Heating target temperature")
        t_in = inlet_flow.temperature_c
        if temperature.celsius < t_in:
            raise InvalidArgumentError(
                f"Temperature cannot be decreased in a heating process. "
                f"DBT_in = {t_in} degC, DBT_target = {temperature.celsius} degC")
        t_max = max_heating_temperature(inlet_flow)
        if temperature.celsius > t_max:
            raise InvalidArgumentError(
                f"Target temperature {temperature.celsius} degC exceeds the heating "
                f"limit {t_max:.2f} degC at {inlet_flow.pressure_pa} Pa")
        self.temperature = temperature

    def apply(self) -> HeatingResult:
        return heating_from_temperature(self.inlet_flow, self.temperature.celsius)


class HeatingFromRelativeHumidity(HeatingStrategy):
    process_mode = ProcessMode.FROM_HUMIDITY

    def __init__(self, inlet_flow: HumidAirFlow, relative_humidity: RelativeHumidity):
        super().__init__(inlet_flow)
        require_not_none(relative_humidity, "Heating target relative humidity")
        rh_in = inlet_flow.relative_humidity_pct
        rh = relative_humidity.percent
        if rh < 0.0:
            raise InvalidArgumentError(f"Relative humidity cannot be negative, got {rh} %")
        if rh > rh_in:
            raise InvalidArgumentError(
                f"Relative humidity cannot be increased in a heating process. "
                f"RH_in = {rh_in:.3f} %, RH_target = {rh} %")
        if rh == 0.0 and rh_in > 0.0:
            raise InvalidArgumentError("Heating cannot dry humid air down to 0 % RH")
        if rh < rh_in:
            t_out = humid_air.dry_bulb_from_humidity_ratio_and_rh(
                inlet_flow.humidity_ratio, rh, inlet_flow.pressure_pa)
            t_max = max_heating_temperature(inlet_flow)
            if t_out > t_max:
                raise InvalidArgumentError(
                    f"RH_target = {rh} % requires {t_out:.2f} degC, above the heating "
                    f"limit {t_max:.2f} degC")
        self.relative_humidity = relative_humidity

    def apply(self) -> HeatingResult:
        return heating_from_relative_humidity(self.inlet_flow, self.relative_humidity.percent)
