'''General counting method machinery.'''

import abc
from typing import List

from bettervote.candidate import Candidate


class VotingSystemError(Exception):
    '''A counting method with a valid setup ended up in an unresolvable state.

    This signals a defect in the counting code, never an invalid ballot;
    results of an invocation that raised it must not be used.
    '''
    pass


class Evaluator(metaclass=abc.ABCMeta):
    '''Count the ballots of a poll and determine the winners.

    A root abstract base class for all counting methods.
    '''
    @abc.abstractmethod
    def evaluate(self, votes, *args, **kwargs) -> List[Candidate]:
        '''Count the ballots and determine the winners.'''
        raise NotImplementedError


class Selector(Evaluator):
    '''Elect up to a given number of winners.

    This is the contract shared by all BetterVote counting methods: the
    result is ordered best first, contains no candidate twice and never holds
    more than ``min(n_seats, number of candidates)`` candidates. Ties are
    always resolved before returning.
    '''
    @abc.abstractmethod
    def evaluate(self, votes, n_seats, *args, **kwargs) -> List[Candidate]:
        '''Elect up to n_seats candidates as a list.

        :param votes: Counted ranked votes.
        :param n_seats: Number of candidates to elect; zero or less
            elects nobody.
        '''
        raise NotImplementedError


class PreConverted(Selector):
    '''A counting method fed through a ballot converter.

    Lets the counting methods, which work on counted ballots, take the raw
    ballots as cast, normalizing and validating them on the way.

    :param converter: A converter to apply on the ballots first, usually a
        :class:`bettervote.convert.BallotCollector`.
    :param evaluator: The counting method to run on the converted ballots.
    '''
    def __init__(self, converter, evaluator):
        self.converter = converter
        self.evaluator = evaluator

    def evaluate(self, votes, *args, **kwargs):
        '''Convert the ballots and count them by the wrapped method.

        All other arguments are passed through to the evaluator.
        '''
        return self.evaluator.evaluate(
            self.converter.convert(votes), *args, **kwargs
        )
