'''Observers of the course of instant-runoff counts.

An :class:`bettervote.evaluate.sequential.InstantRunoff` evaluator can be
given a tracer, which gets notified of each counted round and of the outcome
of each count. The counting itself never writes any output; attach a
:class:`LoggingTracer` to get the rounds into the log, or a
:class:`RecordingTracer` to inspect them afterwards.
'''

import logging
from typing import List


class RoundTracer:
    '''Base tracer that ignores all notifications.

    Subclasses override the methods for the events they are interested in.
    '''
    def round_counted(self, record) -> None:
        '''Receive the record of a round just counted.

        :param record: A :class:`bettervote.evaluate.sequential.RoundRecord`.
        '''
        pass

    def finished(self, result) -> None:
        '''Receive the outcome of a finished count.

        :param result: A :class:`bettervote.evaluate.sequential.IRVResult`.
        '''
        pass


class RecordingTracer(RoundTracer):
    '''Keep all round records and count results in lists.'''
    def __init__(self):
        self.rounds: List = []
        self.results: List = []

    def round_counted(self, record) -> None:
        self.rounds.append(record)

    def finished(self, result) -> None:
        self.results.append(result)

    def clear(self) -> None:
        '''Forget everything recorded so far.'''
        self.rounds.clear()
        self.results.clear()


class LoggingTracer(RoundTracer):
    '''Write the course of the count to a logger.

    Every round is logged with its vote totals and its outcome; the end of the
    count is logged with the terminal state.

    :param logger_name: Name of the logger to write to.
    :param level: Logging level of the messages.
    '''
    def __init__(self,
                 logger_name: str = __name__,
                 level: int = logging.INFO,
                 ):
        self.logger_name = logger_name
        self.level = level
        self._logger = logging.getLogger(logger_name)

    def round_counted(self, record) -> None:
        if record.winner is not None:
            outcome = 'elected {!r}'.format(record.winner)
        elif record.eliminated is not None:
            outcome = 'eliminated {!r}'.format(record.eliminated)
        else:
            outcome = 'no decision'
        self._logger.log(
            self.level, 'round %d: %s (active %d, threshold %s), %s',
            record.number, record.totals, record.n_active, record.threshold,
            outcome
        )

    def finished(self, result) -> None:
        self._logger.log(
            self.level, 'count finished after %d rounds: %s, winner %r',
            len(result.rounds), result.state.value, result.winner
        )
