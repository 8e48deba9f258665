"""
Bracketing root finder for implicit process calculations.

Process strategies often know the outcome they want (an outlet RH, a cooling
power, a mixed temperature) but can only compute the outcome for a given
controlling variable (an outlet temperature, a dry air split). The root
finder inverts such relations with Brent's method (``scipy.optimize.brentq``).

Residual Contract:
    The residual callback returns ``(residual, state)``: the scalar residual
    ``target - actual(x)`` and the full result object computed on the way.
    The finder keeps the state of every evaluation and hands back the state
    computed at the root, so callers never recompute it.

Counterpart Points:
    The two initial points are expected, not required, to bracket a sign
    change. When they do not, the finder widens the interval (within optional
    hard limits) and scans it for a sign change before giving up.

Failure:
    ``SolutionNotConvergedError`` is raised when no sign change is found, when
    Brent's method exhausts its iteration cap, or when the residual at the
    converged point is not within the accuracy.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

import numpy as np
from scipy.optimize import brentq

from hvac_engine.core.constants import SolverDefaults
from hvac_engine.core.exceptions import InvalidArgumentError, SolutionNotConvergedError

logger = logging.getLogger(__name__)

T = TypeVar('T')

ResidualFunction = Callable[[float], Tuple[float, T]]


@dataclass(frozen=True)
class RootSolution(Generic[T]):
    """Converged argument, its residual and the state computed there."""
    x: float
    residual: float
    state: T
    evaluations: int


class BrentRootFinder:
    """
    Brent's method with state capture and bracket search.

    Args:
        name: Label used in logs and errors.
        accuracy: Maximum absolute residual accepted at the root.
        max_iterations: Iteration cap passed to Brent's method.
        x_tolerance: Absolute tolerance on the argument.
        bracket_search_cycles: Widening/scan cycles tried when the counterpart
            points do not bracket a sign change.

    Not safe for concurrent use: evaluations are cached on the instance for
    the duration of one ``find_root`` call.

    Example:
        >>> finder = BrentRootFinder("square")
        >>> sol = finder.find_root(lambda x: (2.0 - x * x, x * x), 0.0, 2.0)
        >>> round(sol.x, 9)
        1.414213562
    """

    def __init__(self, name: str = "BrentRootFinder",
                 accuracy: float = SolverDefaults.ACCURACY,
                 max_iterations: int = SolverDefaults.MAX_ITERATIONS,
                 x_tolerance: float = SolverDefaults.X_TOLERANCE,
                 bracket_search_cycles: int = SolverDefaults.BRACKET_SEARCH_CYCLES):
        if accuracy <= 0.0:
            raise InvalidArgumentError(f"Solver accuracy must be positive, got {accuracy}")
        if max_iterations < 1:
            raise InvalidArgumentError(f"Solver iteration cap must be >= 1, got {max_iterations}")
        self.name = name
        self.accuracy = accuracy
        self.max_iterations = max_iterations
        self.x_tolerance = x_tolerance
        self.bracket_search_cycles = bracket_search_cycles
        self._evaluations: Dict[float, Tuple[float, T]] = {}

    def with_name(self, name: str) -> 'BrentRootFinder':
        """Copy of this finder with the same settings under another label."""
        return BrentRootFinder(name, self.accuracy, self.max_iterations,
                               self.x_tolerance, self.bracket_search_cycles)

    def find_root(self, residual_function: ResidualFunction,
                  a: float, b: float,
                  lower_limit: Optional[float] = None,
                  upper_limit: Optional[float] = None,
                  target: Optional[float] = None) -> RootSolution[T]:
        """
        Find x with |residual(x)| <= accuracy, starting from counterpart points.

        Args:
            residual_function: Callable returning ``(residual, state)``.
            a, b: Counterpart points.
            lower_limit, upper_limit: Hard bounds for the bracket search.
            target: Target value, only reported in errors.

        Returns:
            RootSolution with the converged x and the state computed at x.

        Raises:
            SolutionNotConvergedError: If no root within accuracy is found.
        """
        self._evaluations = {}

        def evaluate(x: float) -> Tuple[float, T]:
            x = float(x)
            if x not in self._evaluations:
                self._evaluations[x] = residual_function(x)
            return self._evaluations[x]

        def scalar(x: float) -> float:
            return evaluate(x)[0]

        lo, hi = min(a, b), max(a, b)
        if lower_limit is not None:
            lo = min(max(lo, lower_limit), hi)
        if upper_limit is not None:
            hi = max(min(hi, upper_limit), lo)
        r_lo, r_hi = scalar(lo), scalar(hi)
        logger.debug(f"[{self.name}] counterpart points f({lo:.6g})={r_lo:.6g}, "
                     f"f({hi:.6g})={r_hi:.6g}")

        for x, r in ((lo, r_lo), (hi, r_hi)):
            if r == 0.0:
                return self._solution(x, evaluate(x))

        if np.sign(r_lo) == np.sign(r_hi):
            bracket = self._search_bracket(scalar, lo, hi, lower_limit, upper_limit)
            if bracket is None:
                best_x = min(self._evaluations, key=lambda k: abs(self._evaluations[k][0]))
                best_r = self._evaluations[best_x][0]
                raise SolutionNotConvergedError(
                    f"[{self.name}] no sign change of the residual found around "
                    f"[{lo:.6g}, {hi:.6g}]; best x = {best_x:.6g}, residual = {best_r:.6g}, "
                    f"target = {target}",
                    solver_name=self.name, x=best_x, residual=best_r, target=target
                )
            lo, hi = bracket
            if scalar(lo) == 0.0:
                return self._solution(lo, evaluate(lo))

        root, info = brentq(scalar, lo, hi, xtol=self.x_tolerance,
                            maxiter=self.max_iterations, full_output=True, disp=False)
        residual, state = evaluate(root)

        if not info.converged or abs(residual) > self.accuracy:
            raise SolutionNotConvergedError(
                f"[{self.name}] solution did not converge after {info.iterations} "
                f"iterations: x = {root:.10g}, residual = {residual:.6g}, target = {target}",
                solver_name=self.name, x=root, residual=residual, target=target
            )

        logger.debug(f"[{self.name}] converged in {info.iterations} iterations: "
                     f"x = {root:.10g}, residual = {residual:.3g}")
        return self._solution(root, (residual, state))

    def _solution(self, x: float, evaluation: Tuple[float, T]) -> RootSolution[T]:
        residual, state = evaluation
        return RootSolution(x=float(x), residual=residual, state=state,
                            evaluations=len(self._evaluations))

    def _search_bracket(self, scalar: Callable[[float], float],
                        lo: float, hi: float,
                        lower_limit: Optional[float],
                        upper_limit: Optional[float]) -> Optional[Tuple[float, float]]:
        """Widen [lo, hi] and scan it for adjacent points of opposite sign."""
        width = hi - lo if hi > lo else 1.0
        for cycle in range(1, self.bracket_search_cycles + 1):
            start = lo - width * cycle
            stop = hi + width * cycle
            if lower_limit is not None:
                start = max(start, lower_limit)
            if upper_limit is not None:
                stop = min(stop, upper_limit)
            points = np.linspace(start, stop, 2 ** (cycle + 1) + 1)
            values = np.array([scalar(x) for x in points])
            for i in np.flatnonzero(np.sign(values[:-1]) != np.sign(values[1:])):
                logger.debug(f"[{self.name}] bracket found in cycle {cycle}: "
                             f"[{points[i]:.6g}, {points[i + 1]:.6g}]")
                return float(points[i]), float(points[i + 1])
        return None
