# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module forwards the termination signals to the children.

When the build is interrupted, the wrapper shall not leave the compiler or
the analyzer running. The signal handlers are installed before the first
child is started, and forward the received signal to every child which was
not reaped yet. """

import os
import signal
from typing import Dict, Iterable  # noqa: ignore=F401

from libcswrap.supervisor import ProcessSupervisor  # noqa: ignore=F401

__all__ = ['FORWARDED_SIGNALS', 'SignalRelay']

FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGQUIT, signal.SIGTERM)


class SignalRelay(object):
    """ Forwards the received signals to the running children.

    It can be used as a context manager, which installs the handlers on
    enter and restores the previous ones on exit. """

    def __init__(self, supervisor, signals=FORWARDED_SIGNALS):
        # type: (ProcessSupervisor, Iterable[int]) -> None
        self.supervisor = supervisor
        self.signals = tuple(signals)
        self.previous = dict()  # type: Dict[int, object]

    def __call__(self, signum, _frame):
        for child in self.supervisor.alive():
            try:
                os.kill(child.pid, signum)
            except ProcessLookupError:
                # reaped in the meantime
                pass

    def install(self):
        # type: () -> None
        for signum in self.signals:
            self.previous[signum] = signal.signal(signum, self)

    def restore(self):
        # type: () -> None
        for signum, handler in self.previous.items():
            # None when the previous one was not installed from Python
            signal.signal(signum,
                          signal.SIG_DFL if handler is None else handler)
        self.previous.clear()

    def __enter__(self):
        self.install()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.restore()
