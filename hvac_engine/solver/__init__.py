"""Iterative equation inversion."""

from hvac_engine.solver.root_finder import BrentRootFinder, RootSolution

__all__ = ['BrentRootFinder', 'RootSolution']
