# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module implements the compiler wrapper commands.

A compiler wrapper is installed as a symbolic link named after the compiler
(gcc, g++, cc, ...), placed in front of the real compiler in the search path.
The wrapper executes the real compiler, and in the meantime it runs a static
analyzer in background against the same source files. The exit code of the
wrapper is always the exit code of the real compiler.

When the wrapper is called by its own name, it prints usage information. """

import logging
import os
import os.path
import sys
from typing import List, Mapping, Optional  # noqa: ignore=F401

from libcswrap import command_entry_point, reconfigure_logging, \
    Invocation, EXIT_SUCCESS, EXIT_FAILURE
from libcswrap.config import WrapperProfile, CSCPPC, CSCLNG, CSGCCA, \
    debug_enabled  # noqa: ignore=F401
from libcswrap.path import ConfigurationError, sanitize_path
from libcswrap.signals import SignalRelay
from libcswrap.supervisor import ProcessSupervisor, ChildProcess, \
    COMPILER, ANALYZER  # noqa: ignore=F401
from libcswrap.translate import analyzer_command

__all__ = ['main', 'cscppc', 'csclng', 'csgcca']

USAGE = """Usage:
    export PATH="`{wrapper} --print-path-to-wrap`:$PATH"

    {wrapper} is a compiler wrapper that runs {analyzer} in background.  Create
    a symbolic link to {wrapper} named as your compiler (gcc, g++, ...) and put it
    to your $PATH.  {wrapper} --help prints this text to standard error output.
"""


@command_entry_point
def cscppc():
    # type: () -> int
    """ Entry point for 'cscppc' command. """

    return main(CSCPPC)


@command_entry_point
def csclng():
    # type: () -> int
    """ Entry point for 'csclng' command. """

    return main(CSCLNG)


@command_entry_point
def csgcca():
    # type: () -> int
    """ Entry point for 'csgcca' command. """

    return main(CSGCCA)


def main(profile, argv=None):
    # type: (WrapperProfile, Optional[List[str]]) -> int
    """ Dispatch the invocation of the wrapper.

    :param profile: the wrapper which runs
    :param argv:    the command line (the default is the current one)
    :return: the exit code of the wrapper process """

    argv = sys.argv if argv is None else argv
    # messages are tagged with the wrapper name, not the symlink name
    logging.getLogger().name = profile.wrapper_name
    if not argv:
        logging.error('empty command line')
        return EXIT_FAILURE

    # check which tool we are asked to run via this wrapper
    tool = os.path.basename(argv[0])
    if tool == profile.wrapper_name:
        return handle_args(profile, argv)

    reconfigure_logging(debug_enabled(profile, os.environ))
    # remove self from the search path in order to avoid infinite recursion
    try:
        path = sanitize_path(tool, argv[0], os.environ.get('PATH'),
                             profile.wrapper_name)
    except ConfigurationError as error:
        logging.error('%s', error)
        return EXIT_FAILURE
    if path is not None:
        os.environ['PATH'] = path

    invocation = Invocation(tool=tool, cmd=list(argv))
    return run_compiler_and_analyzer(profile, invocation, os.environ)


def handle_args(profile, argv):
    # type: (WrapperProfile, List[str]) -> int
    """ The wrapper was called by its own name. """

    if len(argv) == 2 and argv[1] == '--print-path-to-wrap':
        print(wrapper_path(argv[0]))
        return EXIT_SUCCESS

    return usage(profile, argv)


def wrapper_path(arg0):
    # type: (str) -> str
    """ The directory which contains the wrapper executable. """

    return os.path.dirname(os.path.realpath(arg0))


def usage(profile, argv):
    # type: (WrapperProfile, List[str]) -> int
    """ Print usage to the standard error output.

    :return: success if the user really asked for help, failure otherwise """

    analyzer = 'gcc -fanalyzer' if profile.analyzer_name == 'gcc' else \
        profile.analyzer_name
    sys.stderr.write(USAGE.format(wrapper=profile.wrapper_name,
                                  analyzer=analyzer))

    return EXIT_SUCCESS if '--help' in argv else EXIT_FAILURE


def run_compiler_and_analyzer(profile, invocation, environment):
    # type: (WrapperProfile, Invocation, Mapping[str, str]) -> int
    """ Run the real compiler and the analyzer side by side.

    The analyzer is killed when the compilation failed. The exit status of
    the analyzer is ignored.

    :param profile:     the wrapper which runs
    :param invocation:  the tool name and the original command line
    :param environment: the environment to read the analyzer options from
    :return: the exit code of the compiler """

    supervisor = ProcessSupervisor()
    with SignalRelay(supervisor):
        compiler = supervisor.launch(COMPILER, invocation.tool,
                                     invocation.cmd, profile.compiler_del_args)
        if compiler is None:
            return EXIT_FAILURE

        analyzer = consider_running_analyzer(supervisor, profile,
                                             invocation.cmd, environment)

        status = supervisor.wait_for(compiler)

        if analyzer is not None:
            if status:
                # compilation failed, kill analyzer now
                supervisor.terminate(analyzer)
            # analyzer was started, wait till it finishes
            supervisor.wait_for(analyzer)

        return status


def consider_running_analyzer(supervisor, profile, cmd, environment):
    # type: (ProcessSupervisor, WrapperProfile, List[str], Mapping[str, str]) -> Optional[ChildProcess]
    """ Start the analyzer when the compiler command is worth to analyze.

    Any problem here is silently ignored, the compiler runs already.

    :return: the analyzer child process, or None if it was not started """

    try:
        command = analyzer_command(cmd, profile, environment)
    except MemoryError:
        return None
    if command is None:
        return None

    for index, arg in enumerate(command):
        logging.debug('argv[%d] = %s', index, arg)

    return supervisor.launch(ANALYZER, command[0], command)
