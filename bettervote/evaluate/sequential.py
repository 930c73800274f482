'''Evaluators that operate sequentially on ranked votes.

This hosts the instant-runoff evaluator (:class:`InstantRunoff`), which
repeatedly tallies the ballots and eliminates the least popular candidate
until somebody holds a majority of the ballots still in play.
'''

import enum
from typing import Any, List, Dict, Collection, Optional, NamedTuple

import bettervote.util
import bettervote.component.tally
import bettervote.evaluate.core
from bettervote.candidate import Candidate
from bettervote.component.tally import RoundTally
from bettervote.vote import RankedVoteType


class CountState(enum.Enum):
    '''Terminal states of a single instant-runoff count.'''
    MAJORITY = 'majority'
    '''A candidate exceeded the majority threshold of a round.'''
    EXHAUSTED = 'exhausted'
    '''As many candidates were eliminated as received votes in the first round.'''
    SINGLE_REMAINING = 'single_remaining'
    '''Eliminations left a single candidate that never reached a majority.'''


class SingleRemainingPolicy(enum.Enum):
    '''What to do when eliminations leave a single candidate in the contest.'''
    NO_WINNER = 'no_winner'
    '''The count ends without a winner.'''
    ELECT = 'elect'
    '''The remaining candidate wins.'''


class RoundRecord(NamedTuple):
    '''The course of one instant-runoff round, as reported to tracers.

    :param number: 1-based round number.
    :param totals: Vote totals of the candidates still receiving votes.
    :param n_active: Number of ballots active in the round.
    :param threshold: Majority threshold of the round.
    :param eliminated: The candidate eliminated in the round, if any.
    :param winner: The candidate elected in the round, if any.
    '''
    number: int
    totals: Dict[Candidate, int]
    n_active: int
    threshold: Any
    eliminated: Optional[Candidate] = None
    winner: Optional[Candidate] = None


class IRVResult(NamedTuple):
    '''The outcome of a single instant-runoff count.

    :param winner: The winning candidate, None if there is none.
    :param state: The terminal state the count ended in.
    :param rounds: Records of all rounds, in order.
    '''
    winner: Optional[Candidate]
    state: CountState
    rounds: List[RoundRecord]


class InstantRunoff(bettervote.evaluate.core.Selector):
    '''Instant-runoff voting (IRV) evaluator.

    In each round, every ballot counts for its highest ranked candidate(s)
    still in the contest (see :func:`bettervote.component.tally.tally_round`).
    A candidate with more votes than half of the ballots active in the round
    wins. Otherwise, the candidate with the fewest votes is eliminated and
    the ballots are tallied again. Among candidates tied for the fewest votes,
    the one that appears latest in the ballots (the highest ordinal of
    :func:`bettervote.util.candidate_ordinals`) is eliminated.

    Ballots ranking several candidates jointly give a full vote to each of
    them. Should more than one candidate exceed the threshold as a result,
    the one with the most votes wins, then the one appearing first in the
    ballots.

    Candidates that never receive a vote in any round are never eliminated;
    the count ends when at most one candidate is left receiving votes. It
    also ends without a winner once as many candidates have been eliminated
    as there were in the first round, even if lower preferences brought other
    candidates in later.

    For more than one seat, the count is repeated with the previous winners
    removed from the contest from the outset, until the seats are filled or
    a count ends without a winner.

    :param single_remaining: Policy for the case when eliminations leave
        a single candidate who did not exceed the threshold of any round.
        The default ends the count without a winner.
    :param tracer: An object notified of the progress of the count, with
        a ``round_counted(record)`` and ``finished(result)`` method. See
        the :mod:`bettervote.tracing` module.
    '''
    def __init__(self,
                 single_remaining: SingleRemainingPolicy = (
                     SingleRemainingPolicy.NO_WINNER
                 ),
                 tracer: Optional[Any] = None,
                 ):
        self.single_remaining = SingleRemainingPolicy(single_remaining)
        self.tracer = tracer

    def evaluate(self,
                 votes: Dict[RankedVoteType, int],
                 n_seats: int = 1,
                 ) -> List[Candidate]:
        '''Select candidates by instant-runoff voting.

        :param votes: Counted ranked votes. Equal rankings are allowed.
        :param n_seats: Number of candidates to select.
        :returns: Winners in the order of election. Might be shorter than
            n_seats if a count ends without a winner.
        '''
        elected = []
        while len(elected) < n_seats:
            result = self.count(votes, elected=elected)
            if result.winner is None:
                break
            elected.append(result.winner)
        return elected

    def count(self,
              votes: Dict[RankedVoteType, int],
              elected: Collection[Candidate] = (),
              ) -> IRVResult:
        '''Run a single instant-runoff count to find one winner.

        :param votes: Counted ranked votes.
        :param elected: Candidates already elected, removed from the contest
            from the outset.
        :raises VotingSystemError: If the count ends up in a state where no
            candidate can be eliminated (this is never caused by the votes).
        '''
        ordinals = bettervote.util.candidate_ordinals(votes)
        elected = frozenset(elected)
        eliminated = []
        rounds = []
        tally = self._tally(votes, elected, eliminated, ordinals)
        n_candidates = len(tally.totals)
        if n_candidates <= 1:
            # a lone candidate holds every active ballot
            winner = next(iter(tally.majority()), None)
            self._add_round(rounds, tally, winner=winner)
            if winner is None:
                return self._finish(None, CountState.EXHAUSTED, rounds)
            return self._finish(winner, CountState.MAJORITY, rounds)
        while len(tally.totals) > 1:
            winner = self.majority_winner(tally, ordinals)
            if winner is not None:
                self._add_round(rounds, tally, winner=winner)
                return self._finish(winner, CountState.MAJORITY, rounds)
            loser = self.select_eliminated(tally, ordinals)
            eliminated.append(loser)
            self._add_round(rounds, tally, eliminated=loser)
            if len(eliminated) == n_candidates:
                return self._finish(None, CountState.EXHAUSTED, rounds)
            tally = self._tally(votes, elected, eliminated, ordinals)
        if tally.totals and self.single_remaining is SingleRemainingPolicy.ELECT:
            winner = next(iter(tally.totals))
        else:
            winner = None
        self._add_round(rounds, tally, winner=winner)
        return self._finish(winner, CountState.SINGLE_REMAINING, rounds)

    @staticmethod
    def majority_winner(tally: RoundTally,
                        ordinals: Dict[Candidate, int],
                        ) -> Optional[Candidate]:
        '''Return the candidate winning the round by majority, if any.'''
        above = tally.majority()
        if not above:
            return None
        return min(above, key=lambda cand: (-above[cand], ordinals[cand]))

    @staticmethod
    def select_eliminated(tally: RoundTally,
                          ordinals: Dict[Candidate, int],
                          ) -> Candidate:
        '''Return the candidate to eliminate after the round.

        :raises VotingSystemError: If there is no candidate to eliminate.
        '''
        if not tally.totals:
            raise bettervote.evaluate.core.VotingSystemError(
                'no candidate to eliminate in instant-runoff round'
            )
        return min(
            tally.totals,
            key=lambda cand: (tally.totals[cand], -ordinals[cand])
        )

    @staticmethod
    def _tally(votes: Dict[RankedVoteType, int],
               elected: Collection[Candidate],
               eliminated: List[Candidate],
               ordinals: Dict[Candidate, int],
               ) -> RoundTally:
        return bettervote.component.tally.tally_round(
            votes, elected.union(eliminated), ordinals
        )

    def _add_round(self,
                   rounds: List[RoundRecord],
                   tally: RoundTally,
                   eliminated: Optional[Candidate] = None,
                   winner: Optional[Candidate] = None,
                   ) -> None:
        record = RoundRecord(
            number=len(rounds) + 1,
            totals=tally.totals,
            n_active=tally.n_active,
            threshold=tally.threshold,
            eliminated=eliminated,
            winner=winner,
        )
        rounds.append(record)
        if self.tracer is not None:
            self.tracer.round_counted(record)

    def _finish(self,
                winner: Optional[Candidate],
                state: CountState,
                rounds: List[RoundRecord],
                ) -> IRVResult:
        result = IRVResult(winner=winner, state=state, rounds=rounds)
        if self.tracer is not None:
            self.tracer.finished(result)
        return result
