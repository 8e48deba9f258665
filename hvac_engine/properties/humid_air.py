"""
Humid air property model.

Pure functions of dry bulb temperature [degC], humidity ratio [kg/kg] and
absolute pressure [Pa]. Enthalpies are in kJ/kg of dry air.

Thermodynamic Model:
    - Saturation pressure: ASHRAE formulation with separate ice (t < 0 degC)
      and liquid water branches.
    - Humid air is treated as an ideal mixture of dry air and vapour. Moisture
      above the saturation limit is carried as liquid fog (t > 0 degC) or ice
      fog (t <= 0 degC).
    - Dew point: Arden-Buck estimate, refined by root solving below 25 % RH.
    - Wet bulb: Stull estimate replaced by an adiabatic saturation balance.

Inversions (temperature from enthalpy, from humidity ratio and RH, and the
boiling temperature at a given pressure) are solved with
``scipy.optimize.brentq`` over the physical temperature domain.

References:
    ASHRAE Fundamentals Handbook, Psychrometrics chapter.
    Buck, A. L. (1981), New equations for computing vapor pressure.
    Stull, R. (2011), Wet-bulb temperature from relative humidity.
"""

import math
from functools import lru_cache
from typing import Callable

from scipy.optimize import brentq

from hvac_engine.core.constants import (
    GasConstants, HumidAirLimits, SolverDefaults, StandardConditions
)
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.properties import dry_air, ice, liquid_water, water_vapour

WG_RATIO = GasConstants.WG_RATIO

# Saturation pressure over ice
_C1, _C2, _C3, _C4 = -5.6745359e+03, 6.3925247e+00, -9.6778430e-03, 6.2215701e-07
_C5, _C6, _C7 = 2.0747825e-09, -9.4840240e-13, 4.1635019e+00
# Saturation pressure over liquid water
_C8, _C9, _C10 = -5.8002206e+03, 1.3914993e+00, -4.8640239e-02
_C11, _C12, _C13 = 4.1764768e-05, -1.4452093e-08, 6.5459673e+00

# Upper end of the inversion domain used for the boiling temperature search
_BOILING_SEARCH_MAX_C = 400.0


def _solve(function: Callable[[float], float], lower: float, upper: float,
           quantity: str) -> float:
    f_lower = function(lower)
    f_upper = function(upper)
    if f_lower == 0.0:
        return lower
    if f_upper == 0.0:
        return upper
    if (f_lower > 0.0) == (f_upper > 0.0):
        raise InvalidArgumentError(
            f"Cannot determine {quantity}: no solution between {lower:.3f} "
            f"and {upper:.3f} degC"
        )
    return brentq(function, lower, upper,
                  xtol=SolverDefaults.X_TOLERANCE,
                  maxiter=SolverDefaults.MAX_ITERATIONS)


def _alfa_t(ta: float) -> float:
    """Arden-Buck temperature term."""
    if ta > 0.0:
        b, c, d = 18.678, 257.14, 234.5
    else:
        b, c, d = 23.036, 279.82, 333.7
    return (b - ta / d) * (ta / (c + ta))


def saturation_pressure(ta: float) -> float:
    """Water vapour saturation pressure, Pa."""
    tk = ta + StandardConditions.KELVIN_OFFSET
    if ta < 0.0:
        ln_ps = (_C1 / tk + _C2 + _C3 * tk + _C4 * tk ** 2 + _C5 * tk ** 3
                 + _C6 * tk ** 4 + _C7 * math.log(tk))
    else:
        ln_ps = (_C8 / tk + _C9 + _C10 * tk + _C11 * tk ** 2 + _C12 * tk ** 3
                 + _C13 * math.log(tk))
    return math.exp(ln_ps)


def saturation_pressure_from_x_rh(x: float, rh: float, pressure_pa: float) -> float:
    """Saturation pressure implied by a humidity ratio at a given RH, Pa."""
    return x * pressure_pa / ((WG_RATIO * rh / 100.0) + x * rh / 100.0)


def humidity_ratio(rh: float, ps: float, pressure_pa: float) -> float:
    """Humidity ratio for RH [%] and saturation pressure ps [Pa], kg/kg."""
    pv = rh / 100.0 * ps
    return WG_RATIO * pv / (pressure_pa - pv)


def max_humidity_ratio(ps: float, pressure_pa: float) -> float:
    return humidity_ratio(100.0, ps, pressure_pa)


def relative_humidity(ta: float, x: float, pressure_pa: float) -> float:
    """Relative humidity in percent, capped at 100 for fog states."""
    if x == 0.0:
        return 0.0
    ps = saturation_pressure(ta)
    rh = x * pressure_pa / (WG_RATIO * ps + x * ps)
    return 100.0 if rh > 1.0 else rh * 100.0


def dew_point_temperature(ta: float, rh: float, pressure_pa: float) -> float:
    """Dew point temperature, degC. Returns -inf for perfectly dry air."""
    if rh >= 100.0:
        return ta
    if rh == 0.0:
        return -math.inf
    if ta > 0.0:
        b, c, d = 18.678, 257.14, 234.5
    else:
        b, c, d = 23.036, 279.82, 333.7
    a = 2.0 / d
    beta = math.log(rh / 100.0) + _alfa_t(ta)
    b_trh = b - beta
    c_trh = -c * beta
    tdp_estimated = 1.0 / a * (b_trh - math.sqrt(b_trh * b_trh + 2.0 * a * c_trh))
    if rh >= 25.0:
        return tdp_estimated

    x = humidity_ratio(rh, saturation_pressure(ta), pressure_pa)
    lower = HumidAirLimits.TEMPERATURE_MIN_C

    def residual(temp: float) -> float:
        return max_humidity_ratio(saturation_pressure(temp), pressure_pa) - x

    # Vapour content below what the correlation resolves at the domain floor
    if residual(lower) >= 0.0:
        return lower
    return _solve(residual, lower, ta, "dew point temperature")


def wet_bulb_temperature(ta: float, rh: float, pressure_pa: float) -> float:
    """Adiabatic saturation (wet bulb) temperature, degC."""
    if rh >= 100.0:
        return ta
    lower = HumidAirLimits.TEMPERATURE_MIN_C
    if ta <= lower:
        return ta
    x = humidity_ratio(rh, saturation_pressure(ta), pressure_pa)
    h = specific_enthalpy(ta, x, pressure_pa)

    def residual(temp: float) -> float:
        x1 = max_humidity_ratio(saturation_pressure(temp), pressure_pa)
        h1 = specific_enthalpy(temp, x1, pressure_pa)
        hw1 = ice.specific_enthalpy(temp) if temp <= 0.0 else liquid_water.specific_enthalpy(temp)
        return h + (x1 - x) * hw1 - h1

    # Saturated within roundoff
    if residual(ta) >= 0.0:
        return ta
    return _solve(residual, lower, ta, "wet bulb temperature")


def specific_enthalpy(ta: float, x: float, pressure_pa: float) -> float:
    """Specific enthalpy of humid air per kg of dry air, kJ/kg."""
    i_da = dry_air.specific_enthalpy(ta)
    if x == 0.0:
        return i_da
    x_max = max_humidity_ratio(saturation_pressure(ta), pressure_pa)
    i_wv = water_vapour.specific_enthalpy(ta)
    if x <= x_max:
        return i_da + x * i_wv
    # Fog: vapour at saturation, the excess as liquid or ice
    excess = x - x_max
    return (i_da + x_max * i_wv
            + excess * liquid_water.specific_enthalpy(ta)
            + excess * ice.specific_enthalpy(ta))


def specific_heat(ta: float, x: float) -> float:
    """Isobaric specific heat per kg of dry air, kJ/(kg.K)."""
    return dry_air.specific_heat(ta) + x * water_vapour.specific_heat(ta)


def density(ta: float, x: float, pressure_pa: float) -> float:
    """Density of humid air, kg/m3."""
    if x == 0.0:
        return dry_air.density(ta, pressure_pa)
    p_kpa = pressure_pa / 1000.0
    tk = ta + StandardConditions.KELVIN_OFFSET
    return 1.0 / ((0.2871 * tk * (1.0 + 1.6078 * x)) / p_kpa)


@lru_cache(maxsize=256)
def max_dry_bulb_temperature(pressure_pa: float) -> float:
    """Temperature at which saturation pressure reaches the absolute pressure."""
    return _solve(lambda ta: pressure_pa - saturation_pressure(ta),
                  HumidAirLimits.TEMPERATURE_MIN_C, _BOILING_SEARCH_MAX_C,
                  "boiling temperature")


def _upper_temperature(pressure_pa: float) -> float:
    return min(HumidAirLimits.TEMPERATURE_MAX_C,
               max_dry_bulb_temperature(pressure_pa) - 0.01)


def dry_bulb_from_enthalpy(ix: float, x: float, pressure_pa: float) -> float:
    """Invert ``specific_enthalpy`` for temperature at fixed x and pressure."""
    return _solve(lambda ta: ix - specific_enthalpy(ta, x, pressure_pa),
                  HumidAirLimits.TEMPERATURE_MIN_C, _upper_temperature(pressure_pa),
                  f"dry bulb temperature for i = {ix:.4f} kJ/kg")


def dry_bulb_from_humidity_ratio_and_rh(x: float, rh: float, pressure_pa: float) -> float:
    """Temperature at which air with humidity ratio x reaches RH [%]."""
    if rh <= 0.0:
        raise InvalidArgumentError(
            f"Relative humidity must be positive to determine temperature, got {rh}"
        )
    ps_target = saturation_pressure_from_x_rh(x, rh, pressure_pa)
    return _solve(lambda ta: ps_target - saturation_pressure(ta),
                  HumidAirLimits.TEMPERATURE_MIN_C, _upper_temperature(pressure_pa),
                  f"dry bulb temperature for RH = {rh:.3f} %")
