import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import bettervote.convert
import bettervote.util
import bettervote.evaluate.condorcet


VOTES = {
    'schulze': {
        tuple('ACBED'): 5,
        tuple('ADECB'): 5,
        tuple('BEDAC'): 8,
        tuple('CABED'): 3,
        tuple('CAEBD'): 7,
        tuple('CBADE'): 2,
        tuple('DCEBA'): 7,
        tuple('EBADC'): 8,
    },
    'tennessee': {
        ('M', 'N', 'C', 'K'): 42,
        ('N', 'C', 'K', 'M'): 26,
        ('C', 'K', 'N', 'M'): 15,
        ('K', 'C', 'N', 'M'): 17,
    },
    'cw_wiki': {
        tuple('AB'): 186,
        tuple('AC'): 405,
        tuple('BA'): 305,
        tuple('BC'): 272,
        tuple('CA'): 78,
        tuple('CB'): 105,
    },
    'cw_wiki_mj': {
        tuple('ABC'): 35,
        tuple('CBA'): 34,
        tuple('BCA'): 31,
    },
    'cw_wiki_borda': {
        tuple('ABC'): 3,
        tuple('BCA'): 2,
    },
    'tied_choices': {
        ('A', frozenset('BC')): 3,
        (frozenset('BC'), 'A'): 2,
    },
    'two_singles': {
        ('A', ): 1,
        ('B', ): 1,
    },
}

CONDORCET_WINNERS = {
    'tennessee': 'N',
    'cw_wiki': 'B',
    'cw_wiki_mj': 'B',
    'cw_wiki_borda': 'A',
    'tied_choices': 'A',
}

RESULTS = {
    'schulze': ['E', 'A', 'C', 'B', 'D'],
    'tennessee': ['N', 'C', 'K', 'M'],
    'tied_choices': ['A', 'B', 'C'],
    'two_singles': ['A', 'B'],
}

SCHULZE = bettervote.evaluate.condorcet.Schulze()


@pytest.mark.parametrize('vote_set_name', list(VOTES.keys()))
@pytest.mark.parametrize('n_seats', [0, 1, 2, 3, 10])
def test_schulze_eval(vote_set_name, n_seats):
    votes = VOTES[vote_set_name]
    all_cands = bettervote.util.all_ranked_candidates(votes)
    elected = SCHULZE.evaluate(votes, n_seats)
    assert len(elected) == min(n_seats, len(all_cands))
    assert len(set(elected)) == len(elected)
    assert all(cand in all_cands for cand in elected)
    if elected and vote_set_name in CONDORCET_WINNERS:
        assert elected[0] == CONDORCET_WINNERS[vote_set_name]
    if vote_set_name in RESULTS:
        assert elected == RESULTS[vote_set_name][:n_seats]


def test_schulze_empty():
    assert SCHULZE.evaluate({}, 1) == []


def test_schulze_tie_by_appearance():
    # B and A beat each other equally often, the earlier one goes first
    votes = {('B', 'A'): 1, ('A', 'B'): 1, ('C', ): 1}
    assert SCHULZE.evaluate(votes, 3) == ['B', 'A', 'C']
    assert SCHULZE.evaluate(votes, 1) == ['B']
    assert SCHULZE.evaluate(votes, -1) == []


def test_schulze_pure():
    votes = VOTES['schulze']
    before = dict(votes)
    assert SCHULZE.evaluate(votes, 3) == SCHULZE.evaluate(votes, 3)
    assert votes == before


def test_schulze_unranked_ignored():
    votes = {('A', ): 2, tuple('BA'): 1}
    # unranked at bottom, the ballots ranking only A prefer it over B
    assert SCHULZE.evaluate(votes, 1) == ['A']
    ignoring = bettervote.evaluate.condorcet.Schulze(unranked_at_bottom=False)
    assert ignoring.evaluate(votes, 1) == ['B']


def test_widest_paths():
    # https://en.wikipedia.org/wiki/Schulze_method
    pair_votes = bettervote.convert.RankedToCondorcetVotes().convert(
        VOTES['schulze']
    )
    paths = SCHULZE.widest_paths(pair_votes, list('ABCDE'))
    assert paths['A', 'B'] == 28
    assert paths['B', 'A'] == 25
    assert paths['E', 'A'] == 25
    assert paths['A', 'E'] == 24
    assert paths['B', 'D'] == 33
    assert paths['D', 'B'] == 28


@pytest.mark.parametrize(('votes', 'include_ties', 'wins'), [
    ({('A', 'B'): 3, ('B', 'A'): 2}, False, [('A', 'B')]),
    ({('A', 'B'): 2, ('B', 'A'): 2}, False, []),
    ({('A', 'B'): 2, ('B', 'A'): 2}, True, [('A', 'B'), ('B', 'A')]),
    ({('A', 'B'): 1}, False, [('A', 'B')]),
])
def test_pairwise_wins(votes, include_ties, wins):
    assert bettervote.evaluate.condorcet.pairwise_wins(votes, include_ties) == wins
