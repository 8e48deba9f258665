"""Liquid water property correlations (temperature in degC)."""

import numpy as np

_CP_REGULAR = (3.93240161e-13, -1.525847751e-10, 2.479227180e-08,
               -2.166932275e-06, 1.156152199e-04, -3.400567477e-03,
               4.219924305)
_CP_OUTSIDE = (2.588246403e-15, -3.604612987e-12, 2.112059173e-09,
               -6.727469888e-07, 1.255841880e-04, -1.370455849e-02,
               8.093157187e-01, -15.75651097)
_DENSITY_NUMERATOR = (-280.54253e-12, 105.56302e-09, -46.170461e-06,
                      -7.9870401e-03, 16.945176, 999.83952)


def specific_heat(tx: float) -> float:
    """Specific heat of liquid water, kJ/(kg.K)."""
    if 0.0 < tx <= 100.0:
        return float(np.polyval(_CP_REGULAR, tx))
    return float(np.polyval(_CP_OUTSIDE, tx))


def specific_enthalpy(tx: float) -> float:
    """Enthalpy referenced to 0 degC; zero below freezing."""
    if tx < 0.0:
        return 0.0
    return tx * specific_heat(tx)


def density(tx: float) -> float:
    """Density of liquid water, kg/m3."""
    return float(np.polyval(_DENSITY_NUMERATOR, tx)) / (1.0 + 16.89785e-03 * tx)
