'''Ballot types, ballot normalization and ballot validators.

A ballot in BetterVote is a *ranked* vote: an ordered sequence of choices,
the first being the voter's top preference. Each choice is either a single
candidate or a group of candidates the voter ranked jointly at that position.

Ballots arrive from the outside world in a loose form (lists, tuples, sets or
bare candidates for each choice). :func:`normalize_ranked` turns such a raw
ballot into the canonical form used by all counting code:

-   a **ranked vote** is a tuple of choices, index 0 being the top preference,
-   a **choice** is the candidate itself if the voter ranked a single
    candidate there, or a frozen set of candidates for a tied group.

For example, with candidates Alice, Bob, Charlie, David and Eve,
``['Alice', ['Bob', 'Eve'], 'David']`` normalizes to
``('Alice', frozenset({'Bob', 'Eve'}), 'David')``.

Vote validators check one ranked vote at a time. If a vote is invalid, they
raise a subclass of :class:`VoteError` (or :class:`CandidateError`, if a
candidate contained in the vote is invalid). Counting never starts on a ballot
collection that contains an invalid ballot.
'''

import abc
import collections
import collections.abc
from typing import Any, Tuple, FrozenSet, Union, Optional, Sequence
from numbers import Number

import bettervote.candidate
from bettervote.candidate import Candidate, CandidateError


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A vote is invalid given the poll rules.'''
    pass


class VoteTypeError(VoteError):
    '''A vote is of an invalid type.

    E.g. a bare candidate in place of a ranking.

    :param vtype: Vote type detected as invalid.
    :param expected: Vote type that was expected.
    '''
    def __init__(self, vtype: type, expected: type = None):
        self.vtype = vtype
        self.expected = expected
        message = f'invalid vote type: {vtype}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class VoteMagnitudeError(VoteError):
    '''A vote is too small or too large.

    :param value: Size of the vote that was found to be invalid.
    :param min_value: Minimum value permissible in the context.
    :param max_value: Maximum value permissible in the context.
    :param value_name: Role of the vote size (e.g. number of ranked
        candidates, size of a tied choice...)
    '''
    def __init__(self,
                 value: Number,
                 min_value: Optional[Number] = None,
                 max_value: Optional[Number] = None,
                 value_name: str = 'count',
                 ):
        self.value = value
        self.min_value = min_value
        self.max_value = max_value
        message = f'invalid vote {value_name}: {value}'
        if min_value is not None or max_value is not None:
            parts = []
            if min_value is not None:
                parts.append(f'>={min_value}')
            if max_value is not None:
                parts.append(f'<={max_value}')
            message += ', must be ' + ', '.join(parts)
        super().__init__(message)


class VoteValueError(VoteError):
    '''An explicitly given vote value is invalid.

    Raised for ballot multiplicities that are not non-negative integers.

    :param value: Value of the vote that is invalid.
    :param vote: The vote the value was given for, if known.
    :param allowed: A spectrum of values that is allowed at the given point.
    '''
    def __init__(self,
                 value: Any,
                 vote: Any = None,
                 allowed: Any = None,
                 ):
        self.value = value
        self.vote = vote
        self.allowed = allowed
        message = f'invalid vote value: {value!r}'
        if vote is not None:
            message += f' for ballot {vote}'
        if allowed is not None:
            message += f', allowed: {allowed}'
        super().__init__(message)


class DuplicateCandidateError(VoteError):
    '''A candidate appears in more than one choice of a single ballot.

    :param vote: The offending ranked vote.
    :param candidates: The candidates found more than once.
    '''
    def __init__(self, vote: Any, candidates: Sequence[Candidate]):
        self.vote = vote
        self.candidates = list(candidates)
        super().__init__(
            f'duplicated candidates {self.candidates} in ballot {vote}'
        )


VALIDATION_ERRORS = (VoteError, CandidateError)

ChoiceType = Union[Candidate, FrozenSet[Candidate]]
RankedVoteType = Tuple[ChoiceType, ...]
RawBallotType = Sequence[Union[Candidate, Sequence[Candidate]]]

IntBoundsTupleType = Tuple[Optional[int], Optional[int]]

GROUP_TYPES = (list, tuple, collections.abc.Set)


def choice_members(choice: ChoiceType) -> FrozenSet[Candidate]:
    '''Return the candidates ranked by a single choice of a ranked vote.'''
    if isinstance(choice, frozenset):
        return choice
    else:
        return frozenset([choice])


def normalize_ranked(raw: RawBallotType) -> RankedVoteType:
    '''Turn a raw ballot into a ranked vote tuple.

    Lists, tuples and sets inside the ballot are treated as groups of
    candidates tied at that rank; anything else is a single candidate.
    Groups of one candidate are collapsed to the candidate itself.

    :param raw: The raw ballot; a list or a tuple.
    :raises VoteTypeError: If the ballot is not a list or a tuple.
    :raises VoteMagnitudeError: If any of the groups is empty.
    :raises CandidateError: If a group contains a collection or an
        unhashable object.
    '''
    if not isinstance(raw, (list, tuple)):
        raise VoteTypeError(type(raw), tuple)
    normalized = []
    for rank_i, item in enumerate(raw):
        if isinstance(item, GROUP_TYPES):
            if not item:
                raise VoteMagnitudeError(0, 1, None, f'size of rank {rank_i+1}')
            try:
                group = frozenset(item)
            except TypeError as err:
                raise CandidateError(item, 'hashable candidates') from err
            if len(group) < len(item):
                raise DuplicateCandidateError(raw, _duplicates(item))
            for cand in group:
                if not isinstance(cand, Candidate):
                    raise CandidateError(cand, 'a hashable non-collection object')
            normalized.append(next(iter(group)) if len(group) == 1 else group)
        else:
            normalized.append(item)
    return tuple(normalized)


def _duplicates(items) -> list:
    counts = collections.Counter(items)
    return [cand for cand, n in counts.items() if n > 1]


class VoteMagnitudeChecker:
    '''A helper class to check if a value is in a specified range.

    :param bounds: A tuple with lower and upper bounds (inclusive) for the
        value to be checked. None means the respective bound is not checked.
    :param value_name: Name of the value to be checked (included in the error
        message).
    '''
    def __init__(self,
                 bounds: IntBoundsTupleType = (None, None),
                 value_name: str = 'count',
                 ):
        self.min_value, self.max_value = bounds
        self.value_name = value_name
        self._active = self.min_value is not None or self.max_value is not None

    def __bool__(self) -> bool:
        '''Return True if the checker contains any constraints to check.'''
        return self._active

    def is_valid(self, value: Number) -> bool:
        '''Return True if the value is within the given range.'''
        return (
            (self.min_value is None or value >= self.min_value)
            and (self.max_value is None or value <= self.max_value)
        )

    def check(self, value: Number) -> None:
        '''Check if the value is within the given range.

        :raises VoteMagnitudeError: If the value is outside the given
            range.
        '''
        if not self.is_valid(value):
            raise VoteMagnitudeError(
                value, self.min_value, self.max_value, self.value_name
            )


class VoteValidator(metaclass=abc.ABCMeta):
    '''Validate that a single vote is valid under the poll rules.

    Base class, not intended for direct use.
    '''
    @abc.abstractmethod
    def validate(self, vote: Any) -> None:
        '''Check if the vote satisfies criteria given by the poll.

        :raises NotImplementedError:
        '''
        raise NotImplementedError


DEFAULT_NOMINATOR = bettervote.candidate.BasicNominator()


class RankedVoteValidator(VoteValidator):
    '''Validate a ranked vote (ranking of a number of candidates).

    The vote must be a tuple of candidates or frozen sets thereof. Usage of
    sets indicates tied rankings, which BetterVote polls allow by default.

    :param total_vote_count_bounds: A tuple with lower and upper bounds
        (inclusive) for the number of candidates any vote can rank.
        None means the respective bound is not checked. Polls with many
        candidates can use the upper bound to cap counting cost.
        Ignored if total_count_checker is given.
    :param rank_vote_count_bounds: A tuple with lower and upper bounds
        (inclusive) for the number of candidates allowed to share any rank.
        The default allows tied rankings of any size. Use ``(1, 1)`` to
        disallow ties. Ignored if rank_count_checker is given.
    :param total_count_checker: A :class:`VoteMagnitudeChecker` that checks the
        total number of candidates any vote can rank.
    :param rank_count_checker: A :class:`VoteMagnitudeChecker` that checks
        the number of candidates sharing any rank.
    :param nominator: Nominator used to check candidates. The default uses only
        technical criteria specified by the :class:`Candidate` class.
    '''
    def __init__(self,
                 total_vote_count_bounds: IntBoundsTupleType = (None, None),
                 rank_vote_count_bounds: IntBoundsTupleType = (1, None),
                 total_count_checker: Optional[VoteMagnitudeChecker] = None,
                 rank_count_checker: Optional[VoteMagnitudeChecker] = None,
                 nominator: bettervote.candidate.Nominator = DEFAULT_NOMINATOR,
                 ):
        if total_count_checker is None:
            total_count_checker = VoteMagnitudeChecker(
                total_vote_count_bounds, 'number of ranked candidates'
            )
        if rank_count_checker is None:
            rank_count_checker = VoteMagnitudeChecker(
                rank_vote_count_bounds, 'number of candidates sharing a rank'
            )
        self.total_count_checker = total_count_checker
        self.rank_count_checker = rank_count_checker
        self.nominator = nominator

    def validate(self, vote: RankedVoteType) -> None:
        '''Check if the ranked vote is valid.

        :param vote: Ranked vote to be checked.
        :raises VoteTypeError: If the vote is not a tuple.
        :raises DuplicateCandidateError: If any candidate is specified more
            than once in the ranking.
        :raises CandidateError: If any of the contained candidates
            is invalid.
        :raises VoteMagnitudeError: If the number of candidates (total
            or at a particular rank) is out of the specified bounds.
        '''
        if not isinstance(vote, tuple):
            raise VoteTypeError(type(vote), tuple)
        total_votes = 0
        seen = collections.Counter()
        for item in vote:
            if isinstance(item, collections.abc.Set):
                self.rank_count_checker.check(len(item))
                members = item
            else:
                members = (item, )
            for cand in members:
                self.nominator.validate(cand)
                seen[cand] += 1
            total_votes += len(members)
        self.total_count_checker.check(total_votes)
        if len(seen) < total_votes:
            raise DuplicateCandidateError(
                vote, [cand for cand, n in seen.items() if n > 1]
            )
