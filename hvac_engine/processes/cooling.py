"""
Cooling of humid air on a coil with condensate discharge.

Coil Model:
    The coil wall is taken at the mean coolant temperature ``t_wall``. A
    linear bypass factor ``BF = (t_out - t_wall) / (t_in - t_wall)`` splits
    the dry air flow into:

    - a direct contact part ``(1 - BF) * m_da`` leaving at ``t_wall``,
      saturated when ``t_wall`` is below the inlet dew point and at the inlet
      humidity ratio otherwise;
    - a bypass part ``BF * m_da`` leaving at inlet conditions.

    Condensate: ``m_cond = m_direct * (x_in - x_wall)``, zero above the dew
    point, discharged at ``t_wall``.
    Heat: ``Q = m_direct * (i_wall - i_in) + m_cond * i_water(t_wall)``.

Variants:
    - Temperature: the coil model evaluated at the target outlet temperature.
    - RelativeHumidity: outlet temperature found by the root finder so that
      the outlet RH matches the target; counterpart points are the inlet dew
      point and the inlet temperature.
    - Power: outlet temperature found by the root finder so that the coil
      heat matches the target; counterpart points are the inlet temperature
      and the outlet of dry cooling at the same power, the largest temperature
      drop that power can produce.

All variants keep the outlet between ``t_wall`` and ``t_in`` so the bypass
factor stays within [0, 1].
"""

import logging
from typing import Optional, Union

from hvac_engine.core.constants import ProcessLimits
from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.quantities import Power, RelativeHumidity, Temperature
from hvac_engine.core.stream import HumidAirFlow, HumidAirState, LiquidWaterFlow
from hvac_engine.core.validators import require_non_negative, require_not_none
from hvac_engine.processes.base import ProcessStrategy
from hvac_engine.processes.coolant import CoolantData
from hvac_engine.processes.dry_cooling import dry_cooling_from_power
from hvac_engine.processes.results import CoolingResult
from hvac_engine.properties import humid_air, liquid_water
from hvac_engine.solver.root_finder import BrentRootFinder

logger = logging.getLogger(__name__)


def coil_bypass_factor(wall_temperature_c: float, inlet_temperature_c: float,
                       outlet_temperature_c: float) -> float:
    """Linear coil bypass factor; 1.0 when the coil cannot cool at all."""
    if inlet_temperature_c == wall_temperature_c:
        return 1.0
    return ((outlet_temperature_c - wall_temperature_c)
            / (inlet_temperature_c - wall_temperature_c))


def condensate_discharge(dry_air_mass_flow_kg_s: float, inlet_humidity_ratio: float,
                         outlet_humidity_ratio: float) -> float:
    """Water removed from the air, kg/s. Never negative."""
    require_non_negative(dry_air_mass_flow_kg_s, "Dry air mass flow")
    require_non_negative(inlet_humidity_ratio, "Inlet humidity ratio")
    require_non_negative(outlet_humidity_ratio, "Outlet humidity ratio")
    if inlet_humidity_ratio == 0.0:
        return 0.0
    return max(dry_air_mass_flow_kg_s * (inlet_humidity_ratio - outlet_humidity_ratio), 0.0)


def _unchanged_air(inlet_flow: HumidAirFlow, coolant: CoolantData, heat_w: float,
                   mode: ProcessMode) -> CoolingResult:
    t_in = inlet_flow.temperature_c
    bypass_factor = coil_bypass_factor(coolant.average_temperature_c, t_in, t_in)
    return CoolingResult(mode, inlet_flow, inlet_flow, heat_w,
                         LiquidWaterFlow(t_in, 0.0), bypass_factor, coolant)


def cooling_from_temperature(inlet_flow: HumidAirFlow, coolant: CoolantData,
                             temperature_c: float) -> CoolingResult:
    """
    Evaluate the coil model for a given outlet temperature.

    Args:
        inlet_flow: Air entering the coil.
        coolant: Coolant temperatures defining the wall temperature.
        temperature_c: Outlet dry bulb temperature, within [t_wall, t_in].

    Returns:
        CoolingResult with negative heat of process.

    Raises:
        InvalidArgumentError: If the outlet temperature is outside [t_wall, t_in].
    """
    state = inlet_flow.state
    t_in = state.temperature_c
    t_wall = coolant.average_temperature_c
    if temperature_c == t_in:
        return _unchanged_air(inlet_flow, coolant, 0.0, ProcessMode.FROM_TEMPERATURE)
    if not t_wall <= temperature_c <= t_in:
        raise InvalidArgumentError(
            f"Coil outlet temperature {temperature_c} degC must lie between the coil "
            f"wall temperature {t_wall} degC and the inlet temperature {t_in} degC")

    p = state.pressure_pa
    x_in = state.humidity_ratio
    mda = inlet_flow.dry_air_mass_flow_kg_s
    bypass_factor = coil_bypass_factor(t_wall, t_in, temperature_c)
    m_direct = (1.0 - bypass_factor) * mda
    m_bypass = bypass_factor * mda

    if t_wall >= state.dew_point_c:
        x_wall = x_in
    else:
        x_wall = min(humid_air.max_humidity_ratio(humid_air.saturation_pressure(t_wall), p), x_in)
    m_cond = condensate_discharge(m_direct, x_in, x_wall)

    i_wall = humid_air.specific_enthalpy(t_wall, x_wall, p)
    i_cond = liquid_water.specific_enthalpy(t_wall)
    heat_w = (m_direct * (i_wall - state.specific_enthalpy_kj_kg) + m_cond * i_cond) * 1000.0

    if x_wall >= x_in or mda == 0.0:
        x_out = x_in
    else:
        x_out = min((x_wall * m_direct + x_in * m_bypass) / mda, x_in)
    outlet_flow = HumidAirFlow.from_dry_air_mass_flow(HumidAirState(p, temperature_c, x_out), mda)

    return CoolingResult(ProcessMode.FROM_TEMPERATURE, inlet_flow, outlet_flow, heat_w,
                         LiquidWaterFlow(t_wall, m_cond), bypass_factor, coolant)


def cooling_from_power(inlet_flow: HumidAirFlow, coolant: CoolantData, power_w: float,
                       solver: Optional[BrentRootFinder] = None) -> CoolingResult:
    """
    Outlet of coil cooling that extracts ``power_w`` (<= 0) W.

    When the coil cannot extract the requested power even with the whole flow
    in contact with the wall, the result at the wall temperature is returned
    and a warning is logged.
    """
    if power_w == 0.0 or inlet_flow.mass_flow_kg_s == 0.0:
        return _unchanged_air(inlet_flow, coolant, power_w, ProcessMode.FROM_POWER)

    t_in = inlet_flow.temperature_c
    t_wall = coolant.average_temperature_c
    t_dry = dry_cooling_from_power(inlet_flow, power_w).outlet_flow.temperature_c

    if t_dry < t_wall:
        wall_result = cooling_from_temperature(inlet_flow, coolant, t_wall)
        if wall_result.heat_of_process_w >= power_w:
            logger.warning(
                f"Requested cooling power {power_w:.1f} W exceeds the coil capacity "
                f"{wall_result.heat_of_process_w:.1f} W at wall temperature {t_wall} degC; "
                f"outlet set to the wall temperature")
            return wall_result.with_process_mode(ProcessMode.FROM_POWER)

    finder = (solver or BrentRootFinder()).with_name("CoolingFromPower")

    def residual(t_out: float):
        result = cooling_from_temperature(inlet_flow, coolant, t_out)
        return power_w - result.heat_of_process_w, result

    solution = finder.find_root(residual, t_in, max(t_dry, t_wall),
                                lower_limit=t_wall, upper_limit=t_in, target=power_w)
    return solution.state.with_process_mode(ProcessMode.FROM_POWER)


def cooling_from_relative_humidity(inlet_flow: HumidAirFlow, coolant: CoolantData,
                                   relative_humidity_pct: float,
                                   solver: Optional[BrentRootFinder] = None) -> CoolingResult:
    """Outlet of coil cooling that reaches the target relative humidity [%]."""
    state = inlet_flow.state
    if relative_humidity_pct == state.relative_humidity_pct:
        return _unchanged_air(inlet_flow, coolant, 0.0, ProcessMode.FROM_HUMIDITY)

    t_in = state.temperature_c
    t_floor = max(coolant.average_temperature_c, ProcessLimits.COOLING_TEMPERATURE_MIN_C)
    finder = (solver or BrentRootFinder()).with_name("CoolingFromHumidity")

    def residual(t_out: float):
        result = cooling_from_temperature(inlet_flow, coolant, t_out)
        return relative_humidity_pct - result.outlet_flow.relative_humidity_pct, result

    solution = finder.find_root(residual, state.dew_point_c, t_in,
                                lower_limit=t_floor, upper_limit=t_in,
                                target=relative_humidity_pct)
    return solution.state.with_process_mode(ProcessMode.FROM_HUMIDITY)


def cooling_power_limit_w(inlet_flow: HumidAirFlow) -> float:
    """Quick estimate of the largest cooling power: enthalpy drop to 0 kJ/kg, W."""
    return -inlet_flow.specific_enthalpy_kj_kg * inlet_flow.mass_flow_kg_s * 1000.0


class CoolingStrategy(ProcessStrategy):
    """
    Base of the coil cooling variants; use ``CoolingStrategy.of`` to select one.

    Args:
        inlet_flow: Air entering the coil.
        coolant: Coolant temperatures.
        solver: Root finder settings for the implicit variants. A default
            ``BrentRootFinder`` is used when omitted.
    """

    process_type = ProcessType.COOLING

    def __init__(self, inlet_flow: HumidAirFlow, coolant: CoolantData,
                 solver: Optional[BrentRootFinder] = None):
        super().__init__(inlet_flow)
        require_not_none(coolant, "Coolant data")
        self.coolant = coolant
        self.solver = solver

    @staticmethod
    def of(inlet_flow: HumidAirFlow, coolant: CoolantData,
           target: Union[Power, Temperature, RelativeHumidity],
           solver: Optional[BrentRootFinder] = None) -> 'CoolingStrategy':
        require_not_none(target, "Cooling target")
        if isinstance(target, Power):
            return CoolingFromPower(inlet_flow, coolant, target, solver)
        if isinstance(target, Temperature):
            return CoolingFromTemperature(inlet_flow, coolant, target, solver)
        if isinstance(target, RelativeHumidity):
            return CoolingFromRelativeHumidity(inlet_flow, coolant, target, solver)
        raise InvalidArgumentError(f"Unsupported cooling target: {target!r}")

    def _require_coil_colder_than_inlet(self) -> None:
        t_in = self.inlet_flow.temperature_c
        t_wall = self.coolant.average_temperature_c
        if t_wall >= t_in:
            raise InvalidArgumentError(
                f"Coil wall temperature {t_wall} degC must be lower than the inlet "
                f"temperature {t_in} degC to cool the air")


class CoolingFromPower(CoolingStrategy):
    process_mode = ProcessMode.FROM_POWER

    def __init__(self, inlet_flow: HumidAirFlow, coolant: CoolantData, power: Power,
                 solver: Optional[BrentRootFinder] = None):
        super().__init__(inlet_flow, coolant, solver)
        require_not_none(power, "Cooling power")
        if power.watts > 0.0:
            raise InvalidArgumentError(
                f"Cooling power must be a negative value. Q_in = {power.watts} W")
        limit_w = cooling_power_limit_w(inlet_flow)
        if power.watts < limit_w:
            raise InvalidArgumentError(
                f"Cooling power too large for the provided flow. "
                f"Q_in = {power.watts:.1f} W, Q_limit = {limit_w:.1f} W")
        if power.watts < 0.0:
            self._require_coil_colder_than_inlet()
        self.power = power

    def apply(self) -> CoolingResult:
        return cooling_from_power(self.inlet_flow, self.coolant, self.power.watts, self.solver)


class CoolingFromTemperature(CoolingStrategy):
    process_mode = ProcessMode.FROM_TEMPERATURE

    def __init__(self, inlet_flow: HumidAirFlow, coolant: CoolantData, temperature: Temperature,
                 solver: Optional[BrentRootFinder] = None):
        super().__init__(inlet_flow, coolant, solver)
        require_not_none(temperature, "Cooling target temperature")
        t_target = temperature.celsius
        t_in = inlet_flow.temperature_c
        t_wall = coolant.average_temperature_c
        if t_target < ProcessLimits.COOLING_TEMPERATURE_MIN_C:
            raise InvalidArgumentError(
                f"Cooling target temperature must not be below "
                f"{ProcessLimits.COOLING_TEMPERATURE_MIN_C} degC, got {t_target} degC")
        if t_target > t_in:
            raise InvalidArgumentError(
                f"Temperature cannot be increased in a cooling process. "
                f"DBT_in = {t_in} degC, DBT_target = {t_target} degC")
        if t_target < t_wall:
            raise InvalidArgumentError(
                f"Cooling target temperature {t_target} degC is below the mean coil "
                f"wall temperature {t_wall} degC")
        self.temperature = temperature

    def apply(self) -> CoolingResult:
        return cooling_from_temperature(self.inlet_flow, self.coolant, self.temperature.celsius)


class CoolingFromRelativeHumidity(CoolingStrategy):
    process_mode = ProcessMode.FROM_HUMIDITY

    def __init__(self, inlet_flow: HumidAirFlow, coolant: CoolantData,
                 relative_humidity: RelativeHumidity,
                 solver: Optional[BrentRootFinder] = None):
        super().__init__(inlet_flow, coolant, solver)
        require_not_none(relative_humidity, "Cooling target relative humidity")
        rh = relative_humidity.percent
        rh_in = inlet_flow.relative_humidity_pct
        if not 0.0 <= rh <= ProcessLimits.COOLING_RH_MAX_PCT:
            raise InvalidArgumentError(
                f"Cooling target RH must be within [0, {ProcessLimits.COOLING_RH_MAX_PCT}] %, "
                f"got {rh} %")
        if rh < rh_in:
            raise InvalidArgumentError(
                f"Relative humidity cannot be decreased in a cooling process. "
                f"RH_in = {rh_in:.3f} %, RH_target = {rh} %")
        if rh > rh_in:
            self._require_coil_colder_than_inlet()
        self.relative_humidity = relative_humidity

    def apply(self) -> CoolingResult:
        return cooling_from_relative_humidity(self.inlet_flow, self.coolant,
                                              self.relative_humidity.percent, self.solver)
