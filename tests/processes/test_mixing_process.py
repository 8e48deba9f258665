import logging

import pytest

from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError, MissingArgumentError
from hvac_engine.core.quantities import Temperature
from hvac_engine.core.stream import HumidAirFlow, HumidAirState
from hvac_engine.processes.mixing import (
    MixingOfMultipleFlows,
    MixingOfTwoFlows,
    MixingStrategy,
    MixingToTemperature,
    mix_multiple_flows,
    mix_to_target_temperature,
    mix_two_flows,
)
from hvac_engine.properties import humid_air

PAT = 100_000.0


@pytest.fixture
def frost_and_room():
    """Winter outdoor air and room air, 5000 kg/h of dry air each."""
    mda = 5000.0 / 3600.0
    frost = HumidAirFlow.from_dry_air_mass_flow(
        HumidAirState.from_relative_humidity(-20.0, 100.0, PAT), mda)
    room = HumidAirFlow.from_dry_air_mass_flow(
        HumidAirState.from_relative_humidity(18.0, 55.0, PAT), mda)
    return frost, room


def test_mix_two_flows_conserves_air_water_and_enthalpy(frost_and_room):
    frost, room = frost_and_room
    result = MixingStrategy.of(frost, room).apply()

    x_expected = (frost.humidity_ratio + room.humidity_ratio) / 2.0
    i_expected = (frost.specific_enthalpy_kj_kg + room.specific_enthalpy_kj_kg) / 2.0
    t_expected = humid_air.dry_bulb_from_enthalpy(i_expected, x_expected, PAT)

    outlet = result.outlet_flow
    assert result.process_type == ProcessType.MIXING
    assert result.process_mode == ProcessMode.SIMPLE_MIXING
    assert result.heat_of_process_w == 0.0
    assert outlet.dry_air_mass_flow_kg_s == pytest.approx(2 * 5000.0 / 3600.0)
    assert outlet.humidity_ratio == pytest.approx(x_expected, rel=1e-12)
    assert outlet.specific_enthalpy_kj_kg == pytest.approx(i_expected, abs=1e-8)
    assert outlet.temperature_c == pytest.approx(t_expected, abs=1e-10)
    assert -20.0 < outlet.temperature_c < 18.0
    assert outlet.pressure_pa == PAT


def test_mix_multiple_flows_reference_case():
    """Test three equal volumetric flows of cold, cool and room air."""
    inlet = HumidAirFlow.of_values(-20.0, 99.0, 1000.0)
    recirculation = [HumidAirFlow.of_values(0.0, 80.0, 1000.0),
                     HumidAirFlow.of_values(20.0, 50.0, 1000.0)]

    result = MixingStrategy.of(inlet, recirculation).apply()
    outlet = result.outlet_flow

    assert result.process_mode == ProcessMode.MULTIPLE_MIXING
    assert outlet.temperature_c == pytest.approx(-1.0000413789, abs=1e-2)
    assert outlet.relative_humidity_pct == pytest.approx(99.48335594756662, abs=0.1)
    assert outlet.dry_air_mass_flow_kg_s == pytest.approx(
        inlet.dry_air_mass_flow_kg_s + sum(f.dry_air_mass_flow_kg_s for f in recirculation))
    assert len(result.recirculation_flows) == 2


def test_mixing_a_flow_with_itself_keeps_its_state(outdoor_flow):
    outlet = mix_two_flows(outdoor_flow, outdoor_flow)

    assert outlet.temperature_c == pytest.approx(outdoor_flow.temperature_c, abs=1e-9)
    assert outlet.humidity_ratio == pytest.approx(outdoor_flow.humidity_ratio, rel=1e-12)
    assert outlet.dry_air_mass_flow_kg_s == pytest.approx(2.0 * outdoor_flow.dry_air_mass_flow_kg_s)


def test_two_and_multiple_flow_mixing_agree(outdoor_flow, exhaust_flow):
    two = mix_two_flows(outdoor_flow, exhaust_flow)
    multiple = mix_multiple_flows(outdoor_flow, [exhaust_flow])

    assert multiple.temperature_c == pytest.approx(two.temperature_c, abs=1e-9)
    assert multiple.humidity_ratio == pytest.approx(two.humidity_ratio, rel=1e-12)


def test_mixing_with_zero_flow_returns_other_stream(outdoor_flow, exhaust_flow):
    assert mix_two_flows(outdoor_flow, exhaust_flow.with_mass_flow(0.0)) is outdoor_flow
    assert mix_two_flows(outdoor_flow.with_mass_flow(0.0), exhaust_flow) is exhaust_flow


def test_multiple_mixing_uses_highest_pressure(outdoor_flow):
    high = HumidAirFlow.from_dry_air_mass_flow(
        HumidAirState.from_relative_humidity(20.0, 50.0, 105_000.0), 0.1)
    assert mix_multiple_flows(outdoor_flow, [high]).pressure_pa == 105_000.0


def test_multiple_mixing_without_dry_air_raises(outdoor_flow, exhaust_flow):
    idle_in = outdoor_flow.with_mass_flow(0.0)
    idle_rec = exhaust_flow.with_mass_flow(0.0)

    with pytest.raises(InvalidArgumentError, match="must be positive"):
        mix_multiple_flows(idle_in, [idle_rec])
    with pytest.raises(InvalidArgumentError, match="carry no dry air"):
        MixingStrategy.of(idle_in, [idle_rec])


def test_strategy_selection(outdoor_flow, exhaust_flow):
    assert isinstance(MixingStrategy.of(outdoor_flow, exhaust_flow), MixingOfTwoFlows)
    assert isinstance(MixingStrategy.of(outdoor_flow, [exhaust_flow]), MixingOfMultipleFlows)
    with pytest.raises(MissingArgumentError):
        MixingStrategy.of(outdoor_flow, None)
    assert isinstance(MixingStrategy.of(outdoor_flow, []), MixingOfMultipleFlows)


def test_empty_recirculation_list_passes_inlet_through(outdoor_flow):
    result = MixingStrategy.of(outdoor_flow, []).apply()

    assert result.process_mode == ProcessMode.MULTIPLE_MIXING
    assert result.outlet_flow is outdoor_flow
    assert result.inlet_flow is outdoor_flow
    assert result.recirculation_flows == ()
    assert result.heat_of_process_w == 0.0


class TestMixingToTemperature:

    def test_solves_for_target_temperature(self, outdoor_flow, exhaust_flow):
        total = outdoor_flow.dry_air_mass_flow_kg_s + exhaust_flow.dry_air_mass_flow_kg_s
        result = MixingToTemperature(outdoor_flow, exhaust_flow, Temperature(30.0)).apply()

        recirculation = result.recirculation_flows[0]
        assert result.process_mode == ProcessMode.FROM_TEMPERATURE
        assert result.outlet_flow.temperature_c == pytest.approx(30.0, abs=1e-4)
        assert result.outlet_flow.dry_air_mass_flow_kg_s == pytest.approx(total)
        assert (result.inlet_flow.dry_air_mass_flow_kg_s
                + recirculation.dry_air_mass_flow_kg_s) == pytest.approx(total)
        # Adjusted streams keep their states
        assert result.inlet_flow.state == outdoor_flow.state
        assert recirculation.state == exhaust_flow.state

    def test_explicit_total_flow(self, outdoor_flow, exhaust_flow):
        result = mix_to_target_temperature(outdoor_flow, exhaust_flow, 28.0, 0.5)
        assert result.outlet_flow.dry_air_mass_flow_kg_s == pytest.approx(0.5)
        assert result.outlet_flow.temperature_c == pytest.approx(28.0, abs=1e-4)

    @pytest.mark.parametrize("target, expected", [(40.0, 35.0), (20.0, 25.0)])
    def test_unreachable_target_returns_boundary_mix(self, outdoor_flow, exhaust_flow, target, expected):
        """Test that a target outside the stream temperatures yields the closest boundary."""
        result = MixingToTemperature(outdoor_flow, exhaust_flow, Temperature(target)).apply()
        assert result.outlet_flow.temperature_c == pytest.approx(expected, abs=1e-9)

    def test_minimum_fresh_air_is_kept(self, outdoor_flow, exhaust_flow):
        total = outdoor_flow.dry_air_mass_flow_kg_s + exhaust_flow.dry_air_mass_flow_kg_s
        min_fresh = 0.3 * total
        result = MixingToTemperature(outdoor_flow, exhaust_flow, Temperature(20.0),
                                     min_inlet_dry_air_kg_s=min_fresh).apply()

        assert result.inlet_flow.dry_air_mass_flow_kg_s == pytest.approx(min_fresh)
        assert 25.0 < result.outlet_flow.temperature_c < 35.0

    def test_minimums_above_total_mix_streams_at_minimums(self, outdoor_flow, exhaust_flow, caplog):
        with caplog.at_level(logging.WARNING, logger="hvac_engine"):
            result = mix_to_target_temperature(outdoor_flow, exhaust_flow, 30.0, 0.2,
                                               min_inlet_dry_air_kg_s=0.5,
                                               min_recirculation_dry_air_kg_s=0.5)

        assert result.outlet_flow.dry_air_mass_flow_kg_s == pytest.approx(1.0)
        assert result.inlet_flow.dry_air_mass_flow_kg_s == pytest.approx(0.5)
        assert result.recirculation_flows[0].dry_air_mass_flow_kg_s == pytest.approx(0.5)
        assert result.inlet_flow.temperature_c == outdoor_flow.temperature_c

        expected = mix_two_flows(outdoor_flow.with_dry_air_mass_flow(0.5),
                                 exhaust_flow.with_dry_air_mass_flow(0.5))
        assert result.outlet_flow.temperature_c == pytest.approx(expected.temperature_c)
        assert "exceed the target outlet flow" in caplog.text

    def test_zero_total_without_minimums_raises(self, outdoor_flow, exhaust_flow):
        with pytest.raises(InvalidArgumentError, match="cannot be zero"):
            MixingToTemperature(outdoor_flow, exhaust_flow, Temperature(30.0),
                                dry_air_mass_flow_kg_s=0.0)
        with pytest.raises(InvalidArgumentError, match="cannot be zero"):
            mix_to_target_temperature(outdoor_flow, exhaust_flow, 30.0, 0.0)

    def test_negative_minimum_raises(self, outdoor_flow, exhaust_flow):
        with pytest.raises(InvalidArgumentError, match="cannot be negative"):
            MixingToTemperature(outdoor_flow, exhaust_flow, Temperature(30.0),
                                min_inlet_dry_air_kg_s=-0.1)


def test_mixing_result_serialization(outdoor_flow, exhaust_flow):
    data = MixingStrategy.of(outdoor_flow, exhaust_flow).apply().to_dict()

    assert data['process_type'] == 'MIXING'
    assert data['heat_of_process_w'] == 0.0
    assert len(data['recirculation_flows']) == 1
