from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
import pulp

from .creator import OffloadingLinearProgram

POWER_TOLERANCE = 1e-9


@dataclass(frozen=True)
class LPSolution:
    objective_value: float  # achieved average delay
    variable_values: list[float]
    average_power: float
    feasible: bool


class LPSolver(Protocol):
    def solve(self, linear_program: OffloadingLinearProgram) -> LPSolution:
        ...


class PulpLPSolver:
    """Solves with pulp's bundled CBC; infeasible or over-budget results are flagged, not raised."""

    def __init__(self, msg: bool = False) -> None:
        self._msg = msg

    def solve(self, linear_program: OffloadingLinearProgram) -> LPSolution:
        problem = linear_program.problem
        problem.solve(pulp.PULP_CBC_CMD(msg=self._msg))
        status = pulp.LpStatus[problem.status]

        values = np.array([v.value() or 0.0 for v in linear_program.variables], dtype=float)
        if status != "Optimal":
            return LPSolution(
                objective_value=float("inf"),
                variable_values=values.tolist(),
                average_power=float("inf"),
                feasible=False,
            )

        average_delay = float(linear_program.delay_coefficients @ values)
        average_power = float(linear_program.power_coefficients @ values)
        return LPSolution(
            objective_value=average_delay,
            variable_values=values.tolist(),
            average_power=average_power,
            feasible=average_power <= linear_program.power_budget + POWER_TOLERANCE,
        )
