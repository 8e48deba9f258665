"""Water vapour property correlations (temperature in degC, pressure in Pa)."""

import numpy as np

from hvac_engine.core.constants import GasConstants, LatentHeats, StandardConditions

# cp [kJ/(kg.K)] as polynomials of the kelvin temperature, highest power first
_CP_COLD = (-2.7939677238430251e-16, 4.0000000111904223e-05, 1.8429999999889115)
_CP_REGULAR = (9.8631583006961855e-20, -7.0213425618115390e-16,
               2.0703915723982299e-12, -3.3653682733422277e-09,
               3.1728684251752865e-06, -9.1586611999057584e-04,
               1.9295247225621268)


def specific_heat(tw: float) -> float:
    tk = tw + StandardConditions.KELVIN_OFFSET
    if tw <= -48.15:
        return float(np.polyval(_CP_COLD, tk))
    return float(np.polyval(_CP_REGULAR, tk))


def specific_enthalpy(tw: float) -> float:
    """Enthalpy of vapour including the heat of vaporization at 0 degC, kJ/kg."""
    return specific_heat(tw) * tw + LatentHeats.WATER_VAPORIZATION_KJ_KG


def density(tw: float, pressure_pa: float) -> float:
    tk = tw + StandardConditions.KELVIN_OFFSET
    return pressure_pa / (GasConstants.R_WATER_VAPOUR * tk)
