'''Condorcet selection evaluators.

These evaluators work by examining pairwise orderings between candidates
(how many voters prefer one candidate to another). They take in counted ranked
votes and convert them to pairwise counts by
:class:`bettervote.convert.RankedToCondorcetVotes`, which accounts for shared
rankings and unranked candidates.

The Schulze method implemented here reliably selects a Condorcet winner when
there is one in the input.
'''

import collections
from typing import List, Tuple, Dict
from numbers import Number

import bettervote.convert
import bettervote.util
import bettervote.evaluate.core
from bettervote.candidate import Candidate
from bettervote.vote import RankedVoteType


def pairwise_wins(votes: Dict[Tuple[Candidate, Candidate], Number],
                  include_ties: bool = False,
                  ) -> List[Tuple[Candidate, Candidate]]:
    """Select pairs of candidates where the first is preferred to the second.

    :param votes: Condorcet votes (counts of candidate pairs as they appear
        in the voter rankings); use
        :class:`bettervote.convert.RankedToCondorcetVotes`
        to produce them from ranked votes.
    :param include_ties: Whether to include pairs of candidates that are
        equally preferred.
    """
    wins = []
    for pair, n_votes in votes.items():
        counterpart = votes.get(tuple(reversed(pair)), 0)
        if n_votes > counterpart or (include_ties and n_votes == counterpart):
            wins.append(pair)
    return wins


class Schulze(bettervote.evaluate.core.Selector):
    '''Schulze (beatpath) Condorcet selection evaluator.

    Also called Schwartz Sequential dropping or path voting. Finds paths
    between pairs of candidates in which each candidate pairwise beats the next
    and then ranks the candidates by the number of opponents they beat on
    the strongest such paths. The strength of a pairwise defeat is measured by
    the number of winning votes.

    Candidates with an equal number of beatpath wins are ordered by their
    first appearance in the ballots, so the result always contains as many
    candidates as requested (or all of them, if there are fewer).

    :param unranked_at_bottom: Whether candidates not ranked on a ballot are
        considered ranked below all the ranked ones.
    '''
    def __init__(self, unranked_at_bottom: bool = True):
        self.unranked_at_bottom = unranked_at_bottom

    def evaluate(self,
                 votes: Dict[RankedVoteType, int],
                 n_seats: int = 1,
                 ) -> List[Candidate]:
        '''Select candidates using the Schulze method.

        :param votes: Counted ranked votes.
        :param n_seats: Number of candidates to select.
        '''
        candidates = bettervote.util.all_ranked_candidates(votes)
        pair_votes = bettervote.convert.RankedToCondorcetVotes(
            unranked_at_bottom=self.unranked_at_bottom
        ).convert(votes)
        scores = self.scores(pair_votes, candidates)
        ordinals = {cand: i for i, cand in enumerate(candidates)}
        ranked = sorted(
            candidates, key=lambda cand: (-scores[cand], ordinals[cand])
        )
        return ranked[:max(n_seats, 0)]

    def scores(self,
               pair_votes: Dict[Tuple[Candidate, Candidate], Number],
               candidates: List[Candidate],
               ) -> Dict[Candidate, int]:
        '''Count beatpath wins of the candidates, in candidate order.'''
        paths = self.widest_paths(pair_votes, candidates)
        scores = collections.OrderedDict((cand, 0) for cand in candidates)
        for winner, loser in pairwise_wins(paths):
            scores[winner] += 1
        return dict(scores)

    @staticmethod
    def widest_paths(counts: Dict[Tuple[Candidate, Candidate], Number],
                     candidates: List[Candidate],
                     ) -> Dict[Tuple[Candidate, Candidate], Number]:
        '''Compute strengths of the strongest paths between all pairs.'''
        paths = {}
        for pair, count in counts.items():
            if counts.get(tuple(reversed(pair)), 0) < count:
                paths[pair] = count
        for cand1 in candidates:
            for cand2 in candidates:
                if cand1 != cand2:
                    for cand_aug in candidates:
                        if cand_aug not in (cand1, cand2):
                            paths[cand2, cand_aug] = max(
                                paths.get((cand2, cand_aug), 0),
                                min(
                                    paths.get((cand2, cand1), 0),
                                    paths.get((cand1, cand_aug), 0),
                                )
                            )
        return paths
