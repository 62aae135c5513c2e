# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module is a collection of methods commonly used in this project. """
import collections
import functools
import logging
import sys

from typing import Callable  # noqa: ignore=F401

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

Invocation = collections.namedtuple('Invocation', ['tool', 'cmd'])


def reconfigure_logging(debug):
    # type: (bool) -> None
    """ Reconfigure logging level and format based on the debug knob.

    :param debug: the debug environment variable was set to non-empty value
    :return: no return value
    """
    # exit when nothing to do
    if not debug:
        return

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # tag every message with the process name and pid
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt='%(name)s[%(process)d]: %(message)s'))
    root.handlers = [handler]


def command_entry_point(function):
    # type: (Callable[[], int]) -> Callable[[], int]
    """ Decorator for command entry methods.

    The decorator initialize/shutdown logging and guard on programming
    errors (catch exceptions).

    The decorated method can have arbitrary parameters, the return value will
    be the exit code of the process. """

    @functools.wraps(function)
    def wrapper():
        # type: () -> int
        """ Do housekeeping tasks and execute the wrapped method. """

        try:
            # stdout belongs to the wrapped compiler
            logging.basicConfig(format='%(name)s: %(levelname)s: %(message)s',
                                level=logging.WARNING,
                                stream=sys.stderr)
            return function()
        except KeyboardInterrupt:
            logging.warning('Keyboard interrupt')
            return 130  # signal received exit code for bash
        except OSError:
            logging.exception('Internal error.')
            if logging.getLogger().isEnabledFor(logging.DEBUG):
                logging.error("Please report this bug and attach the output "
                              "to the bug report")
            else:
                logging.error("Please run this command again and turn on "
                              "debug output.")
            return 64  # some non used exit code for internal errors
        finally:
            logging.shutdown()

    return wrapper
