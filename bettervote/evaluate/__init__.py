'''Count the ballots of a poll and determine its winners.

Every counting method is a *selector*: it takes the counted ranked votes and
a requested number of winners, and returns the winners as a list, best
first. The list may be shorter than requested when the method finds no
further winner (instant-runoff can end without a majority), but it never
exceeds the number of candidates.

The implemented methods are instant-runoff voting
(:class:`sequential.InstantRunoff`) and the Schulze method
(:class:`condorcet.Schulze`).

None of the evaluators validate vote correctness; use the tools in the
:mod:`vote` module for that, wrapped in
:class:`bettervote.convert.BallotCollector`.
'''

from bettervote.evaluate.core import *    # noqa
