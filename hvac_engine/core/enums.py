"""
Integer-based enumerations for process and state classification.

All enums use IntEnum so they compare cheaply, sort naturally and serialize
as plain integers, while ``.name`` gives a readable label for reports.
"""

from enum import IntEnum


class VapourStatus(IntEnum):
    """
    Moisture classification of a humid air state.

    Examples:
        state = HumidAirState.from_relative_humidity(20.0, 50.0)
        if state.vapour_status == VapourStatus.UNSATURATED:
            ...
    """
    UNSATURATED = 0  # x < x_max
    SATURATED = 1    # x == x_max
    WATER_FOG = 2    # x > x_max, liquid droplets (T > 0 degC)
    ICE_FOG = 3      # x > x_max, ice crystals (T <= 0 degC)


class ProcessType(IntEnum):
    """
    Process family of a block or result.

    Used by ``ProcessPipeline.results_of_type`` to filter results.
    """
    MIXING = 0
    HEATING = 1
    COOLING = 2


class ProcessMode(IntEnum):
    """Variant of a process family that produced a result."""
    FROM_POWER = 0
    FROM_TEMPERATURE = 1
    FROM_HUMIDITY = 2
    SIMPLE_MIXING = 3
    MULTIPLE_MIXING = 4
