"""Pipeline execution and command-line runner."""

from hvac_engine.simulation.pipeline import ProcessPipeline

__all__ = ['ProcessPipeline']
