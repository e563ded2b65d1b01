"""Numeric substitution for symbolic transition terms.

Responsibilities:
  - Reduce a symbol list to a coefficient for concrete alpha/beta and an
    optional per-action decision probability.
  - Sum terms per edge and edges per state.

Invariants:
  - Every term carries exactly one Action tag.
  - With a decision distribution over admissible actions, the outgoing
    probability of every state is 1.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from ..domain.enums import Action, ParameterSymbol
from ..domain.errors import OffloadingModelError
from ..domain.models import Edge, Symbol

Decision = Callable[[Action], float]


def parameter_value(symbol: ParameterSymbol, alpha: float, beta: float) -> float:
    if symbol == ParameterSymbol.ALPHA:
        return alpha
    if symbol == ParameterSymbol.ALPHA_C:
        return 1.0 - alpha
    if symbol == ParameterSymbol.BETA:
        return beta
    if symbol == ParameterSymbol.BETA_C:
        return 1.0 - beta
    raise ValueError(f"Unknown parameter symbol: {symbol}")


def action_of(symbols: Sequence[Symbol]) -> Action:
    actions = [s for s in symbols if isinstance(s, Action)]
    if len(actions) != 1:
        raise OffloadingModelError(f"Term must carry exactly one action tag: {symbols}")
    return actions[0]


def evaluate_symbols(
    symbols: Sequence[Symbol],
    alpha: float,
    beta: float,
    decision: Optional[Decision] = None,
) -> float:
    """Product of the term's factors; the action tag contributes decision(action)."""
    value = 1.0
    for symbol in symbols:
        if isinstance(symbol, Action):
            if decision is not None:
                value *= decision(symbol)
        else:
            value *= parameter_value(symbol, alpha, beta)
    return value


def edge_probability(
    edge: Edge,
    alpha: float,
    beta: float,
    decision: Optional[Decision] = None,
) -> float:
    return sum(evaluate_symbols(terms, alpha, beta, decision) for terms in edge.symbol_lists)


def outgoing_probability(
    edges: Iterable[Edge],
    alpha: float,
    beta: float,
    decision: Optional[Decision] = None,
) -> float:
    return sum(edge_probability(edge, alpha, beta, decision) for edge in edges)
