"""
Pipeline tests.

The summer air handling unit: outdoor air mixed with room exhaust, cooled on
a 7/14 degC coil to 25 degC and reheated to 30 % RH.
"""

import pytest

from hvac_engine.components import CoolingBlock, FlowSource, HeatingBlock, MixingBlock
from hvac_engine.core.enums import ProcessType
from hvac_engine.core.exceptions import (
    BlockNotFoundError,
    DuplicateBlockError,
    InvalidArgumentError,
    MissingArgumentError,
    PipelineUsageError,
)
from hvac_engine.core.quantities import Power, RelativeHumidity, Temperature
from hvac_engine.processes.coolant import CoolantData
from hvac_engine.processes.results import CoolingResult, HeatingResult, MixingResult
from hvac_engine.simulation.pipeline import ProcessPipeline


@pytest.fixture
def summer_ahu(exhaust_flow):
    pipeline = ProcessPipeline('AHU-summer')
    pipeline.add_block(MixingBlock('mixing', [exhaust_flow]))
    pipeline.add_block(CoolingBlock('coil', CoolantData(7.0, 14.0), Temperature(25.0)))
    pipeline.add_block(HeatingBlock('reheater', RelativeHumidity(30.0)))
    return pipeline


def test_summer_air_handling_unit(summer_ahu, outdoor_flow, exhaust_flow):
    summer_ahu.connect_inlet(outdoor_flow)
    final = summer_ahu.run()

    mixing, cooling, heating = summer_ahu.results()
    assert isinstance(mixing, MixingResult)
    assert isinstance(cooling, CoolingResult)
    assert isinstance(heating, HeatingResult)
    assert final is heating

    total_dry_air = outdoor_flow.dry_air_mass_flow_kg_s + exhaust_flow.dry_air_mass_flow_kg_s
    assert final.outlet_flow.dry_air_mass_flow_kg_s == pytest.approx(total_dry_air)
    assert final.outlet_flow.relative_humidity_pct == pytest.approx(30.0, abs=1e-11)
    assert final.outlet_flow.temperature_c == pytest.approx(40.7, abs=0.1)

    # Each block feeds the next
    assert cooling.inlet_flow is mixing.outlet_flow
    assert heating.inlet_flow is cooling.outlet_flow
    assert cooling.outlet_flow.temperature_c == 25.0
    assert cooling.condensate_flow.mass_flow_kg_s > 0.0
    assert cooling.heat_of_process_w < 0.0

    expected_heat = (total_dry_air * 1000.0
                     * (heating.outlet_flow.specific_enthalpy_kj_kg
                        - heating.inlet_flow.specific_enthalpy_kj_kg))
    assert heating.heat_of_process_w == pytest.approx(expected_heat, rel=1e-6)
    assert heating.heat_of_process_w == pytest.approx(10_000.0, abs=100.0)


def test_results_are_replaced_on_each_run(summer_ahu, outdoor_flow):
    summer_ahu.connect_inlet(outdoor_flow)
    first = summer_ahu.results()
    summer_ahu.run()
    second = summer_ahu.results()
    summer_ahu.run()
    third = summer_ahu.results()

    assert first == ()
    assert len(second) == len(third) == len(summer_ahu) == 3
    assert all(a is not b for a, b in zip(second, third))


def test_inlet_from_flow_source_is_read_on_each_run(summer_ahu, outdoor_flow):
    source = FlowSource('outdoor', outdoor_flow)
    summer_ahu.connect_inlet(source)
    summer_ahu.run()
    mixed_first = summer_ahu.results()[0].outlet_flow.temperature_c

    source.set_flow(outdoor_flow.with_state(outdoor_flow.state.with_temperature(32.0)))
    summer_ahu.run()
    mixed_second = summer_ahu.results()[0].outlet_flow.temperature_c

    assert mixed_second < mixed_first


def test_results_of_type(summer_ahu, outdoor_flow):
    summer_ahu.connect_inlet(outdoor_flow)
    summer_ahu.run()

    assert len(summer_ahu.results_of_type(ProcessType.COOLING)) == 1
    assert len(summer_ahu.results_of_type(HeatingResult)) == 1
    assert summer_ahu.results_of_type(ProcessType.MIXING)[0].process_type == ProcessType.MIXING
    assert summer_ahu.last_result() is summer_ahu.results()[-1]


def test_summary_and_serialization(summer_ahu, outdoor_flow):
    summer_ahu.connect_inlet(outdoor_flow)
    summer_ahu.run()

    rows = summer_ahu.summary()
    assert [row['block_id'] for row in rows] == ['mixing', 'coil', 'reheater']
    assert 'condensate_mass_flow_kg_s' in rows[1]
    assert 'condensate_mass_flow_kg_s' not in rows[2]

    data = summer_ahu.to_dict()
    assert data['name'] == 'AHU-summer'
    assert len(data['blocks']) == 3
    assert data['blocks'][1]['coolant']['supply_temperature_c'] == 7.0


def test_run_without_blocks_raises():
    with pytest.raises(PipelineUsageError, match="No process found"):
        ProcessPipeline().run()


def test_run_without_inlet_raises(summer_ahu):
    with pytest.raises(PipelineUsageError, match="No inlet airflow"):
        summer_ahu.run()
    assert summer_ahu.last_result() is None


def test_empty_inlet_source_is_not_replaced_by_previous_inlet(summer_ahu, outdoor_flow):
    summer_ahu.connect_inlet(outdoor_flow)
    summer_ahu.run()

    summer_ahu.connect_inlet(FlowSource('empty'))
    with pytest.raises(PipelineUsageError, match="No inlet airflow"):
        summer_ahu.run()


def test_failed_run_keeps_previous_results(outdoor_flow):
    """Test that a run aborted midway does not expose partial results."""
    pipeline = ProcessPipeline()
    pipeline.add_block(HeatingBlock('preheater', Power(1000.0)))
    pipeline.add_block(HeatingBlock('heater', Temperature(36.0)))
    source = FlowSource('outdoor', outdoor_flow.with_state(outdoor_flow.state.with_temperature(30.0)))
    pipeline.connect_inlet(source)
    completed = pipeline.run()
    previous = pipeline.results()

    source.set_flow(outdoor_flow)
    with pytest.raises(InvalidArgumentError, match="cannot be decreased"):
        pipeline.run()

    assert pipeline.results() == previous
    assert pipeline.last_result() is completed


def test_first_block_inlet_set_directly(outdoor_flow):
    pipeline = ProcessPipeline()
    heater = HeatingBlock('heater', Temperature(40.0))
    pipeline.add_block(heater)
    heater.set_inlet_flow(outdoor_flow)

    assert pipeline.run().outlet_flow.temperature_c == 40.0


def test_connect_inlet_requires_blocks(outdoor_flow):
    with pytest.raises(PipelineUsageError, match="no blocks"):
        ProcessPipeline().connect_inlet(outdoor_flow)
    with pytest.raises(MissingArgumentError):
        ProcessPipeline().connect_inlet(None)


def test_add_block_returns_index_and_rejects_duplicates():
    pipeline = ProcessPipeline('p')
    assert pipeline.add_block(HeatingBlock('a', Temperature(20.0))) == 0
    assert pipeline.add_block(HeatingBlock('b', Temperature(30.0))) == 1

    with pytest.raises(DuplicateBlockError):
        pipeline.add_block(HeatingBlock('a', Temperature(25.0)))
    with pytest.raises(MissingArgumentError):
        pipeline.add_block(None)
    assert len(pipeline) == 2
    assert [b.block_id for b in pipeline.blocks] == ['a', 'b']


def test_get_block(summer_ahu):
    assert summer_ahu.get_block('coil').block_id == 'coil'
    with pytest.raises(BlockNotFoundError):
        summer_ahu.get_block('humidifier')


def test_block_error_propagates_from_run(outdoor_flow):
    """Test that a target inconsistent with the block inlet aborts the run."""
    pipeline = ProcessPipeline()
    pipeline.add_block(HeatingBlock('heater', Temperature(40.0)))
    pipeline.add_block(HeatingBlock('cooler', Temperature(30.0)))
    pipeline.connect_inlet(outdoor_flow)

    with pytest.raises(InvalidArgumentError, match="cannot be decreased"):
        pipeline.run()
