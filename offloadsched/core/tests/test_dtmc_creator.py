"""Tests for Markov-chain generation: admissibility, branching and grouping."""

from __future__ import annotations

import pytest

from offloadsched.core.domain.config import UserEquipmentStateConfig
from offloadsched.core.domain.enums import Action, ParameterSymbol
from offloadsched.core.domain.errors import IllegalActionError
from offloadsched.core.domain.models import UserEquipmentState
from offloadsched.core.dtmc.creator import DTMCCreator, admissible_actions
from offloadsched.core.dtmc.symbols import outgoing_probability
from offloadsched.core.policy.baseline import (
    GreedyLocalFirstPolicy,
    GreedyOffloadFirstPolicy,
    LocalOnlyPolicy,
    TransmitOnlyPolicy,
    decision_from_policy,
)


def mk_state(q: int, t: int, c: int) -> UserEquipmentState:
    return UserEquipmentState(task_queue_length=q, tu_state=t, cpu_state=c)


def small_config() -> UserEquipmentStateConfig:
    return UserEquipmentStateConfig(task_queue_capacity=2, tu_number_of_packets=1, cpu_number_of_sections=1)


def test_admissible_actions_full_queue_both_idle():
    actions = admissible_actions(mk_state(2, 0, 0))
    assert actions == [
        Action.NoOperation,
        Action.AddToTransmissionUnit,
        Action.AddToCPU,
        Action.AddToBothUnits,
    ]


def test_admissible_actions_never_empty_and_both_units_guarded():
    config = UserEquipmentStateConfig(task_queue_capacity=3, tu_number_of_packets=2, cpu_number_of_sections=3)
    for state in config.all_states():
        actions = admissible_actions(state)
        assert Action.NoOperation in actions
        if Action.AddToBothUnits in actions:
            assert state.task_queue_length >= 2
            assert state.tu_idle and state.cpu_idle


def test_admissible_actions_single_task_no_both_units():
    assert admissible_actions(mk_state(1, 0, 0)) == [
        Action.NoOperation,
        Action.AddToTransmissionUnit,
        Action.AddToCPU,
    ]
    assert admissible_actions(mk_state(0, 0, 0)) == [Action.NoOperation]


def test_both_units_at_full_queue_branches_only_on_tu_completion():
    creator = DTMCCreator(small_config())
    transitions = creator.elementary_transitions(mk_state(2, 0, 0), Action.AddToBothUnits)

    assert len(transitions) == 2
    by_dest = {t.dest: t.symbol_lists for t in transitions}
    assert by_dest[mk_state(0, 1, 0)] == ((ParameterSymbol.BETA_C, Action.AddToBothUnits),)
    assert by_dest[mk_state(0, 0, 0)] == ((ParameterSymbol.BETA, Action.AddToBothUnits),)


def test_noop_with_room_and_idle_tu_branches_on_arrival():
    creator = DTMCCreator(small_config())
    transitions = creator.elementary_transitions(mk_state(0, 0, 0), Action.NoOperation)
    assert [(t.dest, t.symbol_lists) for t in transitions] == [
        (mk_state(0, 0, 0), ((ParameterSymbol.ALPHA_C, Action.NoOperation),)),
        (mk_state(1, 0, 0), ((ParameterSymbol.ALPHA, Action.NoOperation),)),
    ]


def test_busy_tu_with_room_gives_four_branches():
    creator = DTMCCreator(small_config())
    transitions = creator.elementary_transitions(mk_state(1, 1, 0), Action.NoOperation)
    dests = [t.dest for t in transitions]
    assert dests == [mk_state(1, 1, 0), mk_state(2, 1, 0), mk_state(1, 0, 0), mk_state(2, 0, 0)]


def test_full_queue_idle_tu_single_branch_tagged_with_action_only():
    creator = DTMCCreator(small_config())
    transitions = creator.elementary_transitions(mk_state(2, 0, 0), Action.NoOperation)
    assert len(transitions) == 1
    assert transitions[0].dest == mk_state(2, 0, 0)
    assert transitions[0].symbol_lists == ((Action.NoOperation,),)


def test_cpu_progresses_once_per_tick():
    config = UserEquipmentStateConfig(task_queue_capacity=2, tu_number_of_packets=1, cpu_number_of_sections=3)
    creator = DTMCCreator(config)
    transitions = creator.elementary_transitions(mk_state(1, 0, 0), Action.AddToCPU)
    assert {t.dest.cpu_state for t in transitions} == {2}
    transitions = creator.elementary_transitions(mk_state(0, 0, 1), Action.NoOperation)
    assert {t.dest.cpu_state for t in transitions} == {0}


def test_illegal_actions_are_rejected():
    creator = DTMCCreator(small_config())
    with pytest.raises(IllegalActionError):
        creator.elementary_transitions(mk_state(1, 0, 0), Action.AddToBothUnits)
    with pytest.raises(IllegalActionError):
        creator.elementary_transitions(mk_state(1, 1, 0), Action.AddToTransmissionUnit)
    with pytest.raises(IllegalActionError):
        creator.elementary_transitions(mk_state(0, 0, 0), Action.AddToCPU)


def test_unique_edges_group_by_destination_and_keep_all_terms():
    creator = DTMCCreator(small_config())
    state = mk_state(2, 0, 0)
    edges = creator.unique_edges(state)

    dests = [e.dest for e in edges]
    assert len(dests) == len(set(dests))

    expected_terms = sum(
        len(creator.elementary_transitions(state, action)) for action in admissible_actions(state)
    )
    assert sum(len(e.symbol_lists) for e in edges) == expected_terms


def test_create_covers_full_grid_and_stays_in_bounds():
    config = UserEquipmentStateConfig(task_queue_capacity=3, tu_number_of_packets=2, cpu_number_of_sections=2)
    chain = DTMCCreator(config).create()
    grid = set(config.all_states())

    assert set(chain.adjacency_list) == grid
    for edges in chain.adjacency_list.values():
        for edge in edges:
            assert edge.dest in grid


@pytest.mark.parametrize("alpha,beta", [(0.3, 0.6), (0.9, 0.1), (1.0, 1.0)])
def test_outgoing_probability_sums_to_one_for_uniform_decisions(alpha, beta):
    config = UserEquipmentStateConfig(task_queue_capacity=3, tu_number_of_packets=2, cpu_number_of_sections=3)
    chain = DTMCCreator(config).create()

    for state, edges in chain.adjacency_list.items():
        actions = admissible_actions(state)
        share = 1.0 / len(actions)

        def decision(action: Action) -> float:
            return share if action in actions else 0.0

        assert outgoing_probability(edges, alpha, beta, decision) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "policy_cls",
    [LocalOnlyPolicy, TransmitOnlyPolicy, GreedyLocalFirstPolicy, GreedyOffloadFirstPolicy],
)
@pytest.mark.parametrize("alpha,beta", [(0.3, 0.6), (1.0, 0.2)])
def test_outgoing_probability_sums_to_one_for_baseline_decisions(policy_cls, alpha, beta):
    config = UserEquipmentStateConfig(task_queue_capacity=3, tu_number_of_packets=2, cpu_number_of_sections=3)
    chain = DTMCCreator(config).create()
    policy = policy_cls()

    for state, edges in chain.adjacency_list.items():
        decision = decision_from_policy(policy, state)
        assert outgoing_probability(edges, alpha, beta, decision) == pytest.approx(1.0)


@pytest.mark.parametrize("alpha,beta", [(0.3, 0.6), (0.05, 0.95)])
def test_outgoing_probability_sums_to_one_for_skewed_decisions(alpha, beta):
    config = UserEquipmentStateConfig(task_queue_capacity=4, tu_number_of_packets=3, cpu_number_of_sections=2)
    chain = DTMCCreator(config).create()

    for state, edges in chain.adjacency_list.items():
        actions = admissible_actions(state)
        weights = {a: float(a.order + 1) ** 2 for a in actions}
        total = sum(weights.values())

        def decision(action: Action) -> float:
            return weights.get(action, 0.0) / total

        assert outgoing_probability(edges, alpha, beta, decision) == pytest.approx(1.0)
