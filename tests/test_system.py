import sys
import os
import logging

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import bettervote.system
import bettervote.vote
import bettervote.candidate
import bettervote.evaluate.condorcet
from bettervote.system import VotingMethod, count_votes


SCENARIOS = [
    ([['A', 'B'], ['A', 'C'], ['A', 'D'], ['A', 'E'], ['A', 'C']], ['A']),
    ([['A', 'B'], ['A', 'C'], ['A', 'D'], ['X', 'E'], ['X', 'C']], ['A']),
    (
        [
            ['A', 'D'], ['C', 'X', 'D'], ['B', 'D'], ['B', 'D'], ['C', 'D'],
            ['X', 'A', 'D'], ['A', 'X', 'B', 'D'],
        ],
        ['D'],
    ),
    ([['A'], ['B']], []),
    ([['A', 'B'], ['A', 'B'], ['B', 'C'], ['C', 'D'], ['D', 'E']], ['A']),
    ([['A'], ['A'], ['B']], ['A']),
]


@pytest.mark.parametrize(('ballots', 'winners'), SCENARIOS)
def test_count_irv(ballots, winners):
    assert count_votes(ballots, 1) == winners
    assert count_votes(ballots, 1, method='instant-runoff') == winners
    assert count_votes(ballots, 1, method=VotingMethod.INSTANT_RUNOFF) == winners


@pytest.mark.parametrize(('ballots', 'winners'), SCENARIOS)
@pytest.mark.parametrize('method', list(VotingMethod))
@pytest.mark.parametrize('n_winners', [0, 1, 2, 4, 100])
def test_count_clamped(ballots, winners, method, n_winners):
    n_cands = len({cand for ballot in ballots for cand in ballot})
    result = count_votes(ballots, n_winners, method)
    if method == VotingMethod.SCHULZE:
        assert len(result) == min(n_winners, n_cands)
    else:
        assert len(result) <= min(n_winners, n_cands)
    assert count_votes(ballots, n_winners, method) == result


def test_count_generator():
    ballots = (list(ballot) for ballot in ['AB', 'AC', 'BA'])
    assert count_votes(ballots, 1) == ['A']


def test_count_schulze():
    ballots = [['A', 'B', 'C']] * 4 + [['C', 'B', 'A']] * 3 + [['B', 'A', 'C']] * 2
    # instant-runoff eliminates the Condorcet winner B first
    assert count_votes(ballots, 1) == ['A']
    assert count_votes(ballots, 1, method='schulze') == ['B']
    assert count_votes(ballots, 3, method='schulze') == ['B', 'A', 'C']


def test_count_invalid_ballot():
    with pytest.raises(bettervote.vote.DuplicateCandidateError):
        count_votes([['A', 'B'], ['B', 'B']], 1)


@pytest.mark.parametrize('method', ['borda', 'Schulze', '', None])
def test_unknown_method(method):
    with pytest.raises(ValueError):
        count_votes([['A']], 1, method=method)


@pytest.mark.parametrize('method', list(VotingMethod))
def test_get_system(method):
    system = bettervote.system.get_system(method)
    assert system is bettervote.system.get_system(method.value)
    assert isinstance(system, bettervote.system.VotingSystem)


def test_system_table_complete():
    assert set(bettervote.system.SYSTEMS.keys()) == set(VotingMethod)


def test_votesys_transp():
    votes = {tuple('ABC'): 3, tuple('CBA'): 2}
    schulze = bettervote.evaluate.condorcet.Schulze()
    votesys = bettervote.system.VotingSystem('Poll', schulze)
    assert votesys.name == 'Poll'
    assert schulze.evaluate(votes, 2) == votesys.evaluate(votes, 2)


def test_count_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger='bettervote.system'):
        count_votes([['A'], ['A'], ['B']], 1)
    assert 'Instant-Runoff' in caplog.text
    assert "['A']" in caplog.text


@pytest.mark.parametrize('method', list(VotingMethod))
def test_count_nested_group_rejected(method):
    # a set wrapping a set must not be unwrapped into a tied group
    with pytest.raises(bettervote.candidate.CandidateError):
        count_votes([[{frozenset({'A'})}], ['B']], 1, method)
