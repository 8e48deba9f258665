"""Ice property correlations (temperature in degC)."""

import numpy as np

from hvac_engine.core.constants import LatentHeats

_CP = (-0.0000001031, -0.0000277225, 0.0048764802, 2.0509727263)
_DENSITY = (0.00000000000078, 0.00000000005916, -0.00000003790984,
            -0.00000784399543, -0.00061508830263, -0.02237994685111,
            -0.42803436487679, 916.1204382651714)


def specific_heat(tx: float) -> float:
    return float(np.polyval(_CP, tx))


def specific_enthalpy(tx: float) -> float:
    """Enthalpy of ice referenced to liquid water at 0 degC; zero above freezing."""
    if tx > 0.0:
        return 0.0
    return tx * specific_heat(tx) - LatentHeats.ICE_MELT_KJ_KG


def density(tx: float) -> float:
    return float(np.polyval(_DENSITY, tx))
