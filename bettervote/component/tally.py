'''Per-round tallying of ranked votes for elimination-based counting.

Instant-runoff counting proceeds in rounds. In each round, every ballot counts
towards its highest ranked choice that still contains a candidate in the
contest. This module computes such a round tally from the counted ballots and
the set of candidates excluded so far.

Tied choices are not split: when a ballot's highest continuing choice ranks
several candidates jointly, each of them receives one full vote. The vote
totals of a round can therefore add up to more than the number of ballots
that were active in it.
'''

from fractions import Fraction
from typing import Dict, FrozenSet, Collection, NamedTuple, Optional

import bettervote.util
from bettervote.candidate import Candidate
from bettervote.vote import RankedVoteType


class RoundTally(NamedTuple):
    '''Vote totals of a single counting round.

    :param totals: Numbers of votes per candidate. Only candidates that
        received at least one vote are present, ordered by their first
        appearance in the ballots.
    :param n_active: Number of ballots that awarded at least one vote in the
        round (exhausted ballots are not counted).
    '''
    totals: Dict[Candidate, int]
    n_active: int

    @property
    def threshold(self) -> Fraction:
        '''Majority threshold; a candidate wins with more votes than this.'''
        return Fraction(self.n_active, 2)

    def majority(self) -> Dict[Candidate, int]:
        '''Return the candidates whose totals exceed the threshold.'''
        threshold = self.threshold
        return {
            cand: total for cand, total in self.totals.items()
            if total > threshold
        }


def first_continuing(vote: RankedVoteType,
                     excluded: Collection[Candidate],
                     ) -> FrozenSet[Candidate]:
    '''Select the highest ranked candidate(s) still in the contest.

    :param vote: The ranked vote to examine.
    :param excluded: Candidates removed from the contest; skipped along with
        ranks that only contain them.
    :returns: Candidates of the highest ranked choice that has any candidate
        not excluded, without the excluded ones. Empty if the vote is
        exhausted. Will only have multiple members if the vote ranks
        candidates jointly at that position.
    '''
    for choice in vote:
        if isinstance(choice, frozenset):
            continuing = choice.difference(excluded)
            if continuing:
                return continuing
        elif choice not in excluded:
            return frozenset([choice])
    return frozenset()    # exhausted ballot


def tally_round(votes: Dict[RankedVoteType, int],
                excluded: Collection[Candidate] = frozenset(),
                ordinals: Optional[Dict[Candidate, int]] = None,
                ) -> RoundTally:
    '''Count the votes of a single round.

    :param votes: Counted ranked votes, mapping each distinct ballot to the
        number of times it was cast.
    :param excluded: Candidates eliminated (or otherwise removed) so far.
    :param ordinals: Candidate ordering used for the returned totals. If not
        given, computed from the votes by
        :func:`bettervote.util.candidate_ordinals`.
    '''
    if ordinals is None:
        ordinals = bettervote.util.candidate_ordinals(votes)
    excluded = frozenset(excluded)
    totals = {}
    n_active = 0
    for vote, n_cast in votes.items():
        awarded = first_continuing(vote, excluded)
        if awarded:
            n_active += n_cast
            for cand in awarded:
                totals[cand] = totals.get(cand, 0) + n_cast
    return RoundTally(
        totals={cand: totals[cand] for cand in sorted(totals, key=ordinals.get)},
        n_active=n_active,
    )
