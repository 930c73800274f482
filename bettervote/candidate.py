'''Candidate specification and nomination validators.

BetterVote places no requirements on the candidates of a poll apart from
identity: any hashable object such as a string or an integer can be used.
The :class:`Candidate` class is therefore mainly a type marker whose subclass
check rejects objects that would be confused with tied rankings on a ballot
(sets, lists and tuples).

Nominators validate single candidates; the ballot validators in the
:mod:`vote` module use them to check every candidate they encounter.
'''

import abc
import collections.abc
from typing import Any, Collection, Optional


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. an unhashable object, or a candidate that does not stand in the poll.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class Candidate(metaclass=abc.ABCMeta):
    '''An abstract class for poll candidates.

    The subclass check is overridden so that any hashable object that is not
    a set, list or tuple is accepted. Subclasses will not inherit this
    override.
    '''
    @classmethod
    def __subclasshook__(cls, subcl):
        if cls is Candidate:
            return (
                hasattr(subcl, '__hash__')
                and subcl.__hash__ is not None
                and not issubclass(subcl, collections.abc.Set)
                and not issubclass(subcl, (tuple, list))
            )
        else:
            return super().__subclasshook__(subcl)


class Nominator(metaclass=abc.ABCMeta):
    '''An abstract class for nominators (candidacy validators).'''
    @abc.abstractmethod
    def validate(self, candidate: Candidate) -> None:
        '''Check if the candidate satisfies criteria given by the poll.

        :raises NotImplementedError:
        '''
        raise NotImplementedError


class BasicNominator(Nominator):
    '''Validate that the poll candidates are valid objects.

    Does not do any logical checks; only validates that the candidate instance
    passes the criteria of the :class:`Candidate` class.

    :param allow_none: Whether to accept None as a candidate.
    '''
    def __init__(self, allow_none: bool = False):
        self.allow_none = allow_none

    def validate(self, candidate: Candidate) -> None:
        '''Check whether a candidate is valid.

        :param candidate: Candidate to be checked.
        :raises CandidateError: If a candidate is invalid.
        '''
        if not isinstance(candidate, Candidate):
            raise CandidateError(candidate, 'a hashable non-collection object')
        if candidate is None and not self.allow_none:
            raise CandidateError(candidate)


class ListedNominator(Nominator):
    '''Validate that candidates belong to a fixed list standing in the poll.

    A poll is created with its list of candidates; ballots ranking anybody
    else are invalid.

    :param candidates: Candidates standing in the poll.
    :param nominator: Nominator to apply to the candidate first.
    '''
    def __init__(self,
                 candidates: Collection[Candidate],
                 nominator: Optional[Nominator] = None,
                 ):
        self.candidates = list(candidates)
        self.nominator = (
            nominator if nominator is not None else BasicNominator()
        )
        self._allowed = frozenset(self.candidates)

    def validate(self, candidate: Candidate) -> None:
        '''Check whether a candidate stands in the poll.

        :param candidate: Candidate to be checked.
        :raises CandidateError: If the candidate is invalid or not listed.
        '''
        self.nominator.validate(candidate)
        if candidate not in self._allowed:
            raise CandidateError(candidate, 'one of the poll candidates')
