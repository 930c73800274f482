'''Named counting methods and the entry point for counting a poll.

The counting methods a poll can use form the closed :class:`VotingMethod`
enumeration. Each of them maps to a :class:`VotingSystem` that takes the raw
ballots as cast (validating them on the way) and returns the winners.
'''

import enum
import logging
from typing import Dict, Iterable, List, Union

import bettervote.convert
import bettervote.evaluate.core
import bettervote.evaluate.condorcet
import bettervote.evaluate.sequential
from bettervote.candidate import Candidate
from bettervote.vote import RawBallotType

logger = logging.getLogger(__name__)


class VotingMethod(enum.Enum):
    '''Counting methods available to polls.'''
    INSTANT_RUNOFF = 'instant-runoff'
    SCHULZE = 'schulze'


class VotingSystem:
    """A named counting method. Wraps an evaluator.

    :param name: Human-readable name of the method.
    :param evaluator: Evaluator representing the method. To accept raw
        ballots, it should be wrapped in a
        :class:`bettervote.evaluate.core.PreConverted` with a
        :class:`bettervote.convert.BallotCollector`.
    """
    def __init__(self, name: str,
                 evaluator: bettervote.evaluate.core.Evaluator):
        self.name = name
        self.evaluator = evaluator

    def evaluate(self, *args, **kwargs):
        """Return the evaluator's results of the system for the votes given."""
        return self.evaluator.evaluate(*args, **kwargs)


def _collected(evaluator: bettervote.evaluate.core.Selector,
               ) -> bettervote.evaluate.core.Selector:
    return bettervote.evaluate.core.PreConverted(
        converter=bettervote.convert.BallotCollector(),
        evaluator=evaluator,
    )


def _build_system(method: VotingMethod) -> VotingSystem:
    if method is VotingMethod.INSTANT_RUNOFF:
        return VotingSystem('Instant-Runoff', _collected(
            bettervote.evaluate.sequential.InstantRunoff()
        ))
    elif method is VotingMethod.SCHULZE:
        return VotingSystem('Schulze', _collected(
            bettervote.evaluate.condorcet.Schulze()
        ))
    else:
        raise NotImplementedError(f'no voting system for {method!r}')


SYSTEMS: Dict[VotingMethod, VotingSystem] = {
    method: _build_system(method) for method in VotingMethod
}


def get_system(method: Union[VotingMethod, str]) -> VotingSystem:
    '''Return the voting system for a counting method.

    :param method: A counting method or its name (such as
        ``'instant-runoff'``).
    :raises ValueError: If no counting method has the given name.
    '''
    return SYSTEMS[VotingMethod(method)]


def count_votes(ballots: Iterable[RawBallotType],
                n_winners: int,
                method: Union[VotingMethod, str] = VotingMethod.INSTANT_RUNOFF,
                ) -> List[Candidate]:
    '''Count the ballots of a poll and return its winners.

    :param ballots: Raw ballots as cast; each is a list of choices ordered
        from the most preferred, a choice being a candidate or a list of
        candidates ranked equally. Consumed once.
    :param n_winners: Maximum number of winners to return.
    :param method: Counting method to use.
    :returns: The winners, best first. Never longer than n_winners or the
        number of candidates; empty if there is no winner.
    :raises VoteError: If any ballot is malformed.
    :raises CandidateError: If any ballot ranks an invalid candidate.
    :raises ValueError: If the counting method is unknown.
    '''
    system = get_system(method)
    logger.debug('counting %d winner(s) by %s', n_winners, system.name)
    winners = system.evaluate(ballots, n_winners)
    logger.info('%s count result: %s', system.name, winners)
    return winners
