import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import bettervote.util


@pytest.mark.parametrize(('votes', 'ordinals'), [
    ({}, {}),
    ({tuple('BAC'): 1}, {'B': 0, 'A': 1, 'C': 2}),
    (
        {('B', frozenset('CA')): 1, ('D', 'B'): 5},
        {'B': 0, 'A': 1, 'C': 2, 'D': 3},
    ),
    ([tuple('AB'), tuple('CB'), ('D', )], {'A': 0, 'B': 1, 'C': 2, 'D': 3}),
    ({tuple(): 2, ('X', ): 1}, {'X': 0}),
])
def test_candidate_ordinals(votes, ordinals):
    assert bettervote.util.candidate_ordinals(votes) == ordinals


def test_candidate_ordinals_ballot_major():
    # the whole first ballot is numbered before the top choice of the second
    votes = {tuple('ADE'): 1, tuple('BC'): 1}
    assert list(bettervote.util.candidate_ordinals(votes)) == list('ADEBC')


def test_all_ranked_candidates():
    votes = {('C', frozenset('BA')): 2, tuple('DA'): 1}
    assert bettervote.util.all_ranked_candidates(votes) == ['C', 'A', 'B', 'D']


@pytest.mark.parametrize(('choice', 'ordered'), [
    ('A', ['A']),
    (frozenset('CAB'), ['A', 'B', 'C']),
    (frozenset([3, 1, 2]), [1, 2, 3]),
    (frozenset([1, 'a']), ['a', 1]),
])
def test_choice_in_order(choice, ordered):
    assert bettervote.util.choice_in_order(choice) == ordered
