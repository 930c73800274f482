"""BetterVote - ranked-choice vote tallying for online polls.

BetterVote counts the ranked ballots cast in a poll and determines its
winners. Voters rank the candidates in order of preference and may rank
several candidates jointly at the same position.

Counting a poll consists of the following:

-   Checking that every ballot is valid. This is done by the ballot
    normalization and validators in the ``vote`` module, with candidates
    checked by the nominators from the ``candidate`` module; the
    ``convert`` module collects the valid ballots into counted votes.
-   Determining who wins. This is the task of the ``evaluate`` subpackage,
    which contains instant-runoff voting (the default) and the Schulze
    method.

The :func:`system.count_votes` function wraps both steps for any counting
method in the :class:`system.VotingMethod` enumeration.
"""
