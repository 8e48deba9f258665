"""
Adiabatic mixing of humid air flows.

Mixing conserves dry air, water and enthalpy:

    m_da,out = sum(m_da,i)
    x_out    = sum(m_da,i * x_i) / m_da,out
    i_out    = sum(m_da,i * i_i) / m_da,out

and the outlet temperature follows from inverting ``i(t, x_out, p)``. Mixing
to a target temperature adjusts the dry air split between two streams for a
fixed total dry air flow, with a minimum dry air flow kept on each stream.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

from hvac_engine.core.constants import FlowLimits
from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.quantities import Temperature
from hvac_engine.core.stream import HumidAirFlow, HumidAirState
from hvac_engine.core.validators import require_between, require_non_negative, require_not_none
from hvac_engine.processes.base import ProcessStrategy
from hvac_engine.processes.results import MixingResult
from hvac_engine.properties import humid_air
from hvac_engine.solver.root_finder import BrentRootFinder

logger = logging.getLogger(__name__)


def mix_two_flows(inlet_flow: HumidAirFlow, recirculation_flow: HumidAirFlow) -> HumidAirFlow:
    """
    Mix two flows at the inlet flow pressure.

    A stream without dry air does not take part: the other stream is returned
    unchanged.
    """
    mda_in = inlet_flow.dry_air_mass_flow_kg_s
    mda_rec = recirculation_flow.dry_air_mass_flow_kg_s
    mda_out = mda_in + mda_rec
    if mda_in == 0.0:
        return recirculation_flow
    if mda_rec == 0.0 or mda_out == 0.0:
        return inlet_flow

    p = inlet_flow.pressure_pa
    x_out = (mda_in * inlet_flow.humidity_ratio + mda_rec * recirculation_flow.humidity_ratio) / mda_out
    i_out = (mda_in * inlet_flow.specific_enthalpy_kj_kg
             + mda_rec * recirculation_flow.specific_enthalpy_kj_kg) / mda_out
    t_out = humid_air.dry_bulb_from_enthalpy(i_out, x_out, p)
    return HumidAirFlow.from_dry_air_mass_flow(HumidAirState(p, t_out, x_out), mda_out)


def mix_multiple_flows(inlet_flow: HumidAirFlow,
                       recirculation_flows: Sequence[HumidAirFlow]) -> HumidAirFlow:
    """
    Mix the inlet with any number of flows at the highest pressure among them.

    Raises:
        InvalidArgumentError: If the flows carry no dry air at all.
    """
    flows = [inlet_flow, *recirculation_flows]
    mda = np.array([f.dry_air_mass_flow_kg_s for f in flows])
    x = np.array([f.humidity_ratio for f in flows])
    enthalpy = np.array([f.specific_enthalpy_kj_kg for f in flows])

    mda_out = float(mda.sum())
    if mda_out == 0.0:
        raise InvalidArgumentError(
            f"Sum of dry air mass flows of all mixed streams must be positive, got {mda_out}")

    p = max(f.pressure_pa for f in flows)
    x_out = float(np.dot(mda, x) / mda_out)
    i_out = float(np.dot(mda, enthalpy) / mda_out)
    t_out = humid_air.dry_bulb_from_enthalpy(i_out, x_out, p)
    return HumidAirFlow.from_dry_air_mass_flow(HumidAirState(p, t_out, x_out), mda_out)


def mix_to_target_temperature(inlet_flow: HumidAirFlow, recirculation_flow: HumidAirFlow,
                              temperature_c: float, dry_air_mass_flow_kg_s: float,
                              min_inlet_dry_air_kg_s: float = 0.0,
                              min_recirculation_dry_air_kg_s: float = 0.0,
                              solver: Optional[BrentRootFinder] = None) -> MixingResult:
    """
    Split a total dry air flow between two streams to reach a target temperature.

    The stream states are kept and only their dry air flows change. The
    result reports the adjusted streams as inlet and recirculation flows.

    When the target is outside the range reachable under the minimum flows,
    the boundary mix closest to it is returned. When the minimum flows alone
    exceed the requested total, both streams are mixed at their minimum
    flows.

    Raises:
        InvalidArgumentError: If both the total flow and the minimum flows are zero.
        SolutionNotConvergedError: If no split within solver accuracy is found.
    """
    min_sum = min_inlet_dry_air_kg_s + min_recirculation_dry_air_kg_s
    mda_out = dry_air_mass_flow_kg_s
    if min_sum == 0.0 and mda_out == 0.0:
        raise InvalidArgumentError("Target outlet dry air mass flow cannot be zero")

    if min_sum > mda_out:
        logger.warning(
            f"Minimum dry air flows {min_sum:.4f} kg/s exceed the target outlet flow "
            f"{mda_out:.4f} kg/s; mixing the streams at their minimum flows")
        inlet_part = inlet_flow.with_dry_air_mass_flow(min_inlet_dry_air_kg_s)
        recirculation_part = recirculation_flow.with_dry_air_mass_flow(min_recirculation_dry_air_kg_s)
        return MixingResult(ProcessMode.FROM_TEMPERATURE, inlet_part,
                            mix_two_flows(inlet_part, recirculation_part),
                            (recirculation_part,))

    def split(mda_inlet: float) -> MixingResult:
        inlet_part = inlet_flow.with_dry_air_mass_flow(mda_inlet)
        recirculation_part = recirculation_flow.with_dry_air_mass_flow(mda_out - mda_inlet)
        return MixingResult(ProcessMode.FROM_TEMPERATURE, inlet_part,
                            mix_two_flows(inlet_part, recirculation_part),
                            (recirculation_part,))

    mda_inlet_max = mda_out - min_recirculation_dry_air_kg_s
    inlet_rich = split(mda_inlet_max)
    recirculation_rich = split(min_inlet_dry_air_kg_s)
    t_inlet_rich = inlet_rich.outlet_flow.temperature_c
    t_recirculation_rich = recirculation_rich.outlet_flow.temperature_c

    if ((t_inlet_rich <= t_recirculation_rich and temperature_c <= t_inlet_rich)
            or (t_inlet_rich >= t_recirculation_rich and temperature_c >= t_inlet_rich)):
        logger.debug(f"Mixing target {temperature_c} degC at or beyond the inlet-rich "
                     f"boundary {t_inlet_rich:.3f} degC")
        return inlet_rich
    if ((t_recirculation_rich <= t_inlet_rich and temperature_c <= t_recirculation_rich)
            or (t_recirculation_rich >= t_inlet_rich and temperature_c >= t_recirculation_rich)):
        logger.debug(f"Mixing target {temperature_c} degC at or beyond the recirculation-rich "
                     f"boundary {t_recirculation_rich:.3f} degC")
        return recirculation_rich

    finder = (solver or BrentRootFinder()).with_name("MixingToTemperature")

    def residual(mda_inlet: float):
        result = split(mda_inlet)
        return temperature_c - result.outlet_flow.temperature_c, result

    solution = finder.find_root(residual, min_inlet_dry_air_kg_s, mda_out,
                                lower_limit=min_inlet_dry_air_kg_s, upper_limit=mda_inlet_max,
                                target=temperature_c)
    return solution.state


class MixingStrategy(ProcessStrategy):
    """Base of the mixing variants; use ``MixingStrategy.of`` to select one."""

    process_type = ProcessType.MIXING

    @staticmethod
    def of(inlet_flow: HumidAirFlow,
           recirculation: Union[HumidAirFlow, Sequence[HumidAirFlow]]) -> 'MixingStrategy':
        """
        Select two-flow mixing for a single flow, multiple-flow mixing for a sequence.

        Example:
            >>> MixingStrategy.of(outdoor, exhaust).apply().outlet_flow
            >>> MixingStrategy.of(outdoor, [exhaust_a, exhaust_b]).apply()
        """
        require_not_none(recirculation, "Recirculation flow")
        if isinstance(recirculation, HumidAirFlow):
            return MixingOfTwoFlows(inlet_flow, recirculation)
        return MixingOfMultipleFlows(inlet_flow, recirculation)


class MixingOfTwoFlows(MixingStrategy):
    process_mode = ProcessMode.SIMPLE_MIXING

    def __init__(self, inlet_flow: HumidAirFlow, recirculation_flow: HumidAirFlow):
        super().__init__(inlet_flow)
        require_not_none(recirculation_flow, "Recirculation flow")
        self.recirculation_flow = recirculation_flow

    def apply(self) -> MixingResult:
        outlet_flow = mix_two_flows(self.inlet_flow, self.recirculation_flow)
        return MixingResult(self.process_mode, self.inlet_flow, outlet_flow,
                            (self.recirculation_flow,))


class MixingOfMultipleFlows(MixingStrategy):
    process_mode = ProcessMode.MULTIPLE_MIXING

    def __init__(self, inlet_flow: HumidAirFlow, recirculation_flows: Sequence[HumidAirFlow]):
        super().__init__(inlet_flow)
        flows = tuple(require_not_none(recirculation_flows, "Recirculation flows"))
        for i, flow in enumerate(flows):
            require_not_none(flow, f"Recirculation flow #{i}")
        self.recirculation_flows = flows
        total = inlet_flow.dry_air_mass_flow_kg_s + sum(f.dry_air_mass_flow_kg_s for f in flows)
        if flows and total == 0.0:
            raise InvalidArgumentError("Mixed streams carry no dry air")

    def apply(self) -> MixingResult:
        # Nothing to mix with: the inlet passes through
        if not self.recirculation_flows:
            return MixingResult(self.process_mode, self.inlet_flow, self.inlet_flow, ())
        outlet_flow = mix_multiple_flows(self.inlet_flow, self.recirculation_flows)
        return MixingResult(self.process_mode, self.inlet_flow, outlet_flow,
                            self.recirculation_flows)


class MixingToTemperature(MixingStrategy):
    """
    Mixing of two streams adjusted to a target outlet temperature.

    Args:
        inlet_flow: First stream (typically outdoor air).
        recirculation_flow: Second stream.
        temperature: Target outlet temperature.
        dry_air_mass_flow_kg_s: Total outlet dry air flow. Defaults to the sum
            of both supplied streams.
        min_inlet_dry_air_kg_s: Dry air locked on the first stream, e.g. a
            minimum share of fresh air.
        min_recirculation_dry_air_kg_s: Dry air locked on the second stream.
        solver: Root finder settings.
    """

    process_mode = ProcessMode.FROM_TEMPERATURE

    def __init__(self, inlet_flow: HumidAirFlow, recirculation_flow: HumidAirFlow,
                 temperature: Temperature,
                 dry_air_mass_flow_kg_s: Optional[float] = None,
                 min_inlet_dry_air_kg_s: float = 0.0,
                 min_recirculation_dry_air_kg_s: float = 0.0,
                 solver: Optional[BrentRootFinder] = None):
        super().__init__(inlet_flow)
        require_not_none(recirculation_flow, "Recirculation flow")
        require_not_none(temperature, "Mixing target temperature")
        require_non_negative(min_inlet_dry_air_kg_s, "Minimum inlet dry air mass flow")
        require_non_negative(min_recirculation_dry_air_kg_s, "Minimum recirculation dry air mass flow")
        if dry_air_mass_flow_kg_s is None:
            dry_air_mass_flow_kg_s = (inlet_flow.dry_air_mass_flow_kg_s
                                      + recirculation_flow.dry_air_mass_flow_kg_s)
        require_between(dry_air_mass_flow_kg_s, FlowLimits.MASS_FLOW_MIN_KG_S,
                        FlowLimits.MASS_FLOW_CEILING_KG_S, "Target outlet dry air mass flow", "kg/s")
        if dry_air_mass_flow_kg_s == 0.0 and min_inlet_dry_air_kg_s + min_recirculation_dry_air_kg_s == 0.0:
            raise InvalidArgumentError("Target outlet dry air mass flow cannot be zero")
        self.recirculation_flow = recirculation_flow
        self.temperature = temperature
        self.dry_air_mass_flow_kg_s = dry_air_mass_flow_kg_s
        self.min_inlet_dry_air_kg_s = min_inlet_dry_air_kg_s
        self.min_recirculation_dry_air_kg_s = min_recirculation_dry_air_kg_s
        self.solver = solver

    def apply(self) -> MixingResult:
        return mix_to_target_temperature(
            self.inlet_flow, self.recirculation_flow, self.temperature.celsius,
            self.dry_air_mass_flow_kg_s, self.min_inlet_dry_air_kg_s,
            self.min_recirculation_dry_air_kg_s, self.solver)
