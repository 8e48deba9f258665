"""
Physical constants and domain limits for humid air calculations.
"""

from typing import Final


class StandardConditions:
    """Reference conditions."""
    PRESSURE_PA: Final[float] = 101325.0
    KELVIN_OFFSET: Final[float] = 273.15


class GasConstants:
    """Molecular masses and specific gas constants of air components."""
    DRY_AIR_MOLAR_MASS: Final[float] = 28.96546       # kg/kmol
    WATER_VAPOUR_MOLAR_MASS: Final[float] = 18.01528  # kg/kmol
    R_DRY_AIR: Final[float] = 287.055                 # J/(kg.K)
    R_WATER_VAPOUR: Final[float] = 461.52             # J/(kg.K)
    # Ratio of molar masses, vapour to dry air
    WG_RATIO: Final[float] = WATER_VAPOUR_MOLAR_MASS / DRY_AIR_MOLAR_MASS


class LatentHeats:
    """Phase change enthalpies at 0 degC."""
    WATER_VAPORIZATION_KJ_KG: Final[float] = 2500.9
    ICE_MELT_KJ_KG: Final[float] = 334.1


class HumidAirLimits:
    """Domain accepted by HumidAirState."""
    PRESSURE_MIN_PA: Final[float] = 50_000.0
    PRESSURE_MAX_PA: Final[float] = 5_000_000.0
    TEMPERATURE_MIN_C: Final[float] = -150.0
    TEMPERATURE_MAX_C: Final[float] = 200.0
    HUMIDITY_RATIO_MAX: Final[float] = 3.0
    RELATIVE_HUMIDITY_MAX_PCT: Final[float] = 100.0


class FlowLimits:
    """Mass flow bounds. The ceiling only rejects corrupted input."""
    MASS_FLOW_MIN_KG_S: Final[float] = 0.0
    MASS_FLOW_CEILING_KG_S: Final[float] = 5e9


class CoolantLimits:
    """Chilled coolant temperature domain."""
    TEMPERATURE_MIN_C: Final[float] = 0.0
    TEMPERATURE_MAX_C: Final[float] = 90.0


class ProcessLimits:
    """Bounds applied when validating process targets."""
    # Above this RH the coil would need an infinite exchange area
    COOLING_RH_MAX_PCT: Final[float] = 98.0
    COOLING_TEMPERATURE_MIN_C: Final[float] = 0.0
    # Fraction of the boiling temperature accepted as a heating outlet
    HEATING_TEMPERATURE_FRACTION: Final[float] = 0.98


class SolverDefaults:
    """Default settings of the Brent root finder."""
    ACCURACY: Final[float] = 1e-5
    MAX_ITERATIONS: Final[int] = 100
    X_TOLERANCE: Final[float] = 1e-12
    BRACKET_SEARCH_CYCLES: Final[int] = 6
