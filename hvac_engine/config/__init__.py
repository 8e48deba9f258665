"""Pipeline configuration: dataclasses, loaders and builder."""

from hvac_engine.config.pipeline_config import (
    BlockConfig,
    CoolantConfig,
    FlowConfig,
    PipelineConfig,
    SolverConfig,
    TargetConfig,
)
from hvac_engine.config.loaders import ConfigLoader, load_pipeline_config

__all__ = [
    'BlockConfig',
    'CoolantConfig',
    'FlowConfig',
    'PipelineConfig',
    'SolverConfig',
    'TargetConfig',
    'ConfigLoader',
    'load_pipeline_config',
]
