'''Converters between ballot formats.

These objects have a `convert()` method that converts between different formats
of votes. :class:`BallotCollector` turns the raw ballots cast in a poll into
the counted form all evaluators take in; :class:`RankedToCondorcetVotes`
aggregates counted ballots into pairwise preference counts for the Condorcet
evaluators.
'''

import collections
import logging
from typing import Any, Tuple, Dict, Iterable, Mapping, Union

import bettervote.util
import bettervote.vote
from bettervote.candidate import Candidate
from bettervote.vote import RankedVoteType, RawBallotType

logger = logging.getLogger(__name__)


class Converter:
    def convert(self, *args, **kwargs):
        raise NotImplementedError


DEFAULT_VALIDATOR = bettervote.vote.RankedVoteValidator()


class BallotCollector(Converter):
    '''Collect raw ballots into a counted multiset of ranked votes.

    Each raw ballot is normalized by :func:`bettervote.vote.normalize_ranked`
    and checked by the validator. Identical ballots are not merged into one:
    the output maps each distinct ranked vote to the number of times it was
    cast, in the order of first appearance.

    A single invalid ballot rejects the whole collection; the error propagates
    to the caller and nothing is counted.

    :param validator: The vote validator to use. Look for some in the
        :mod:`vote` module.
    '''
    def __init__(self,
                 validator: bettervote.vote.VoteValidator = DEFAULT_VALIDATOR,
                 ):
        self.validator = validator

    def convert(self,
                ballots: Union[
                    Iterable[RawBallotType],
                    Mapping[RankedVoteType, int],
                ],
                ) -> Dict[RankedVoteType, int]:
        '''Normalize, validate and count the ballots.

        :param ballots: Either an iterable of raw ballots (consumed once), or
            a mapping of ranked votes to the number of times they were cast.
        :raises VoteError: If any of the ballots is invalid.
        :raises CandidateError: If any of the ballots ranks an invalid
            candidate.
        '''
        if hasattr(ballots, 'items'):
            weighted = ballots.items()
        else:
            weighted = ((ballot, 1) for ballot in ballots)
        counts = {}
        n_total = 0
        for raw, n_cast in weighted:
            try:
                self._check_count(n_cast, raw)
                vote = bettervote.vote.normalize_ranked(raw)
                self.validator.validate(vote)
            except bettervote.vote.VALIDATION_ERRORS as err:
                logger.warning('rejecting ballot collection: %s', err)
                raise
            if n_cast:
                counts[vote] = counts.get(vote, 0) + n_cast
                n_total += n_cast
        logger.debug('collected %d ballots, %d distinct',
                     n_total, len(counts))
        return counts

    @staticmethod
    def _check_count(n_cast: Any, raw: Any) -> None:
        if isinstance(n_cast, bool) or not isinstance(n_cast, int) \
                or n_cast < 0:
            raise bettervote.vote.VoteValueError(
                n_cast, raw, 'non-negative integers'
            )


class RankedToCondorcetVotes(Converter):
    '''Aggregate ranked votes to counts of pairwise wins.

    Basic component for Condorcet methods. For each ballot that ranks a pair
    of candidates in a given order, adds one to the count of the first
    candidate over the second. Candidates sharing a rank are not compared.

    :param unranked_at_bottom: Whether to consider candidates not ranked on a
        ballot as being ranked last. If False, these candidates are not
        considered (the voter is assumed not to have any preferences there).
    '''
    def __init__(self, unranked_at_bottom: bool = True):
        self.unranked_at_bottom = unranked_at_bottom

    def convert(self,
                votes: Dict[RankedVoteType, int],
                ) -> Dict[Tuple[Candidate, Candidate], int]:
        '''Convert ranked votes to counts of pairwise wins.'''
        all_cands = frozenset(bettervote.util.all_ranked_candidates(votes))
        counts = collections.defaultdict(int)
        for ranking, n_votes in votes.items():
            tiers = [bettervote.vote.choice_members(item) for item in ranking]
            if self.unranked_at_bottom:
                unranked = all_cands.difference(*tiers)
            for i, upper_tier in enumerate(tiers):
                for upper_cand in upper_tier:
                    for lower_tier in tiers[i+1:]:
                        for lower_cand in lower_tier:
                            counts[upper_cand, lower_cand] += n_votes
                    if self.unranked_at_bottom:
                        for unranked_cand in unranked:
                            counts[upper_cand, unranked_cand] += n_votes
        return dict(counts)
