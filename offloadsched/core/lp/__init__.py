"""LP-based stochastic policy synthesis."""

from .creator import OffloadingLinearProgram, OffloadingLPCreator
from .finder import OptimalPolicyFinder, PolicySearchResult, StochasticPolicyConfig
from .index import decode_index, encode_index
from .solver import LPSolution, PulpLPSolver

__all__ = [
    "OffloadingLinearProgram",
    "OffloadingLPCreator",
    "OptimalPolicyFinder",
    "PolicySearchResult",
    "StochasticPolicyConfig",
    "decode_index",
    "encode_index",
    "LPSolution",
    "PulpLPSolver",
]
