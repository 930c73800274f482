'''Various utility functions for other modules of BetterVote.

There should normally be no need to use these functions directly.
'''

from typing import Any, List, Dict, Iterable

from bettervote.vote import RankedVoteType, ChoiceType
from bettervote.candidate import Candidate


def choice_in_order(choice: ChoiceType) -> List[Candidate]:
    '''List the candidates of a single ranked choice in a stable order.

    Tied candidates are ordered by their natural ordering; if they are not
    mutually comparable, by their representation.
    '''
    if not isinstance(choice, frozenset):
        return [choice]
    try:
        return sorted(choice)
    except TypeError:
        return sorted(choice, key=repr)


def all_ranked_candidates(votes: Dict[RankedVoteType, Any]
                          ) -> List[Candidate]:
    '''Return a list of all candidates appearing in any of the rankings.

    Preserves the input ordering: the candidates of the first vote are listed
    first in the order they are ranked in it, then the candidates of the
    second vote not seen yet, etc. Candidates tied at a single rank are
    ordered by :func:`choice_in_order`.

    :param votes: Ranked votes.
    :returns: All unique candidates from the ranked votes.
    '''
    return list(candidate_ordinals(votes).keys())


def candidate_ordinals(votes: Iterable[RankedVoteType]
                       ) -> Dict[Candidate, int]:
    '''Number the candidates by their first appearance in the ranked votes.

    The numbering is stable for a given ordering of the votes and serves
    to break ties between candidates deterministically.

    :param votes: Ranked votes (an iterable or a mapping to counts, the
        counts are disregarded).
    :returns: A dictionary mapping each candidate to its 0-based ordinal,
        in the order of the ordinals.
    '''
    ordinals = {}
    for ranking in votes:
        for choice in ranking:
            for cand in choice_in_order(choice):
                if cand not in ordinals:
                    ordinals[cand] = len(ordinals)
    return ordinals
