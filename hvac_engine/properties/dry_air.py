"""Dry air property correlations (temperature in degC, pressure in Pa)."""

import numpy as np

from hvac_engine.core.constants import GasConstants, StandardConditions

# Quartic fits of cp [kJ/(kg.K)], highest power first
_CP_LOW_RANGE = (1.3020833332371173e-10, -1.3405671294850166e-08,
                 2.9091167529181888e-07, 5.2562229415778261e-05,
                 1.0036104793123004)
_CP_HIGH_RANGE = (3.0582028042912701e-13, -8.4171864437938596e-10,
                  7.4445335877306371e-07, -2.9062712816134989e-05,
                  1.0065876262557212)


def specific_heat(ta: float) -> float:
    """Isobaric specific heat of dry air, kJ/(kg.K)."""
    if ta <= -73.15:
        return 1.002
    if ta <= -53.15:
        return float(np.interp(ta, [-73.15, -53.15], [1.002, 1.003]))
    if ta <= -13.15:
        return 1.003
    if ta <= 86.85:
        return float(np.polyval(_CP_LOW_RANGE, ta))
    return float(np.polyval(_CP_HIGH_RANGE, ta))


def specific_enthalpy(ta: float) -> float:
    """Specific enthalpy of dry air referenced to 0 degC, kJ/kg."""
    return specific_heat(ta) * ta


def density(ta: float, pressure_pa: float) -> float:
    """Ideal gas density of dry air, kg/m3."""
    tk = ta + StandardConditions.KELVIN_OFFSET
    return pressure_pa / (GasConstants.R_DRY_AIR * tk)
