# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module is responsible to run the child processes of the wrapper.

The wrapper runs two programs at the same time: the real compiler and the
analyzer. Both of them are direct children of the wrapper. The supervisor
keeps track of them, so signals can be forwarded to the running ones, and
reaps them when they terminate.

The child process executes the program by searching the executable in the
search path. When that fails, the child terminates with an exit code, which
tells the parent whether the program was not found or it was not executable.
The exit code of a child which was killed by a signal is 128 plus the signal
number, like the shells do. """

import collections
import errno
import logging
import os
import signal
import sys
from typing import Iterable, List, Optional  # noqa: ignore=F401

from libcswrap import EXIT_FAILURE

__all__ = ['COMPILER', 'ANALYZER', 'ChildProcess', 'ExitOutcome',
           'ProcessSupervisor']

COMPILER = 'compiler'
ANALYZER = 'analyzer'

EXITED = 'exited'
SIGNALED = 'signaled'

EXIT_NOT_FOUND = 0x7F
EXIT_NOT_EXECUTABLE = 0x7E
SIGNAL_EXIT_BASE = 0x80


class ExitOutcome(collections.namedtuple('ExitOutcome', ['status', 'cause'])):
    """ Represents how a single child process terminated. """

    @classmethod
    def from_child_info(cls, info):
        # type: (os.waitid_result) -> ExitOutcome
        if info.si_code in (os.CLD_KILLED, os.CLD_DUMPED):
            return cls(status=info.si_status, cause=SIGNALED)
        return cls(status=info.si_status, cause=EXITED)

    def exit_code(self):
        # type: () -> int
        """ The exit code for the wrapper process. """

        if self.cause == SIGNALED:
            return SIGNAL_EXIT_BASE + self.status
        return self.status


class ChildProcess(object):
    """ A child process which was started by the supervisor. """

    def __init__(self, kind, pid):
        # type: (str, int) -> None
        self.kind = kind
        self.pid = pid
        self.alive = True
        self.outcome = None  # type: Optional[ExitOutcome]

    def __repr__(self):
        return 'ChildProcess(kind={0!r}, pid={1}, alive={2})'.format(
            self.kind, self.pid, self.alive)


def _restarting(call, *args):
    """ Run the system call again when a signal interrupted it. """

    while True:
        try:
            return call(*args)
        except InterruptedError:
            continue


def _exec_child(tool, cmd):
    # type: (str, List[str]) -> None
    """ Replace the current (forked) process with the given program.

    It never returns, when the exec fails the process exits. """

    code = EXIT_NOT_EXECUTABLE
    try:
        os.execvp(tool, cmd)
    except OSError as error:
        logging.error("failed to exec '%s' (%s)", tool, error.strerror)
        if error.errno == errno.ENOENT:
            code = EXIT_NOT_FOUND
    finally:
        # the child shall not run any parental clean up
        sys.stderr.flush()
        os._exit(code)


class ProcessSupervisor(object):
    """ Launches and reaps the compiler and the analyzer processes.

    The table of the children is also read by the signal forwarder, which
    might run at any point of the main flow. The liveness of a child is
    cleared before its pid is released. """

    def __init__(self):
        # type: () -> None
        self.children = collections.OrderedDict()

    @property
    def compiler(self):
        # type: () -> Optional[ChildProcess]
        return self.children.get(COMPILER)

    @property
    def analyzer(self):
        # type: () -> Optional[ChildProcess]
        return self.children.get(ANALYZER)

    def alive(self):
        # type: () -> List[ChildProcess]
        """ The children which were not reaped yet. """

        return [child for child in list(self.children.values())
                if child.alive]

    def launch(self, kind, tool, cmd, del_args=None):
        # type: (str, str, List[str], Optional[Iterable[str]]) -> Optional[ChildProcess]
        """ Start a program in a child process.

        :param kind:        the role of the child (compiler or analyzer)
        :param tool:        the executable to search in the search path
        :param cmd:         the command line (the first element is the name
                            which the program will see as its name)
        :param del_args:    arguments to remove from this invocation only
        :return: the started child, or None if the fork failed """

        if del_args:
            removed = frozenset(del_args)
            cmd = [cmd[0]] + [arg for arg in cmd[1:] if arg not in removed]

        try:
            pid = os.fork()
        except OSError as error:
            logging.error("failed to fork() for '%s' (%s)",
                          tool, error.strerror)
            return None

        if pid == 0:
            _exec_child(tool, cmd)

        child = ChildProcess(kind, pid)
        self.children[kind] = child
        return child

    def _reap(self):
        # type: () -> Optional[ChildProcess]
        """ Wait for any child to terminate.

        The terminated child is only peeked at first, it stays a zombie
        while its liveness is cleared. Its pid can not be reused until it
        is released, so the signal forwarder never hits another process.

        :return: the reaped child if that was tracked, None otherwise """

        info = _restarting(os.waitid, os.P_ALL, 0, os.WEXITED | os.WNOWAIT)

        reaped = None
        for child in list(self.children.values()):
            if child.pid == info.si_pid and child.alive:
                child.alive = False
                child.outcome = ExitOutcome.from_child_info(info)
                reaped = child
                break

        # release the zombie
        _restarting(os.waitpid, info.si_pid, 0)
        return reaped

    def wait_for(self, expected):
        # type: (ChildProcess) -> int
        """ Wait till the expected child terminates.

        Other children might be reaped in the meantime. Those are marked
        as terminated, so the signal forwarder will not touch them.

        :param expected: the child to wait for
        :return: the exit code computed from the child's termination """

        while expected.alive:
            try:
                self._reap()
            except OSError as error:
                logging.error("waitid() failed while waiting for %d: %s",
                              expected.pid, error.strerror)
                return EXIT_FAILURE

        return expected.outcome.exit_code()

    def terminate(self, child):
        # type: (ChildProcess) -> None
        """ Send termination signal to the child, when it's still running. """

        if child.alive:
            try:
                os.kill(child.pid, signal.SIGTERM)
            except ProcessLookupError:
                pass
