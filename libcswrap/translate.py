# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module is responsible to translate a compiler invocation into an
analyzer invocation.

The analyzer shall see the same macros, include paths and language standard
as the compiler does, while everything else (linker flags, output files,
warnings) is dropped. Some compiler invocations are not worth to analyze at
all (preprocessing only, dependency generation, configure probes). Those are
reported as `Skip` and the analyzer is not started. """

import collections
import re
from typing import Iterable, Iterator, List, Mapping, Optional, Union  # noqa: ignore=F401

from libcswrap.config import WrapperProfile, custom_options, \
    analyzer_executable  # noqa: ignore=F401

__all__ = ['Translation', 'Skip', 'translate_args', 'analyzer_command',
           'is_input_file', 'is_ignored_file']

Translation = collections.namedtuple('Translation', ['args'])
Skip = collections.namedtuple('Skip', ['reason'])

# Decisions of the per argument classification.
FORWARD = 'forward'
DROP = 'drop'
TAKE_NEXT = 'take-next'
REWRITE_NEXT = 'rewrite-next'
INPUT_FILE = 'input-file'
SKIP_ALL = 'skip-all'

# Input file extensions recognized by every analyzer.
C_SOURCE_SUFFIXES = frozenset({'c'})
# Extra input file extensions when the analyzer understands C++.
CXX_SOURCE_SUFFIXES = frozenset({'C', 'cc', 'cpp', 'cxx'})

# Compiler self-tests done by build configuration tools. Analyzing those
# produces noise and might break the configuration probes.
IGNORED_FILES = frozenset({'conftest.c', '../test.c', '_configtest.c'})
IGNORED_DIRECTORIES = ('/CMakeTmp/',)

# Flags which take a value, and are understood by the analyzers which
# share the compiler flag dialect.
GCC_INCLUDE_FLAGS = frozenset({'-include', '-iquote', '-isystem'})

# Flags passed verbatim to analyzers which share the compiler flag dialect.
GCC_FORWARDED_FLAGS = frozenset({
    '-m16', '-m32', '-m64',
    '-fexceptions', '-fno-exceptions'
})
GCC_FORWARDED_PREFIXES = re.compile(r'^-(O|std)')
# The gcc analyzer gets all feature flags and warning suppressions, to avoid
# spurious warnings.
GCC_ANALYZER_PREFIXES = re.compile(r'^-(f|Wno-)')


def is_input_file(arg, cxx_ready):
    # type: (str, bool) -> bool
    """ Decide whether the argument looks like a source file name.

    The file name shall contain at least one dot, and the extension
    shall be a known one. """

    if arg.startswith('-'):
        return False
    _, dot, suffix = arg.rpartition('.')
    if not dot:
        return False
    return suffix in C_SOURCE_SUFFIXES or \
        (cxx_ready and suffix in CXX_SOURCE_SUFFIXES)


def is_ignored_file(arg):
    # type: (str) -> bool
    """ Files which are compiled by build configuration tools. """

    return arg in IGNORED_FILES or \
        any(directory in arg for directory in IGNORED_DIRECTORIES)


def _is_def_inc(arg, profile):
    # type: (str, WrapperProfile) -> bool
    return arg.startswith('-D') or arg.startswith('-I') or \
        (profile.analyzer_is_gcc_compatible and arg in GCC_INCLUDE_FLAGS)


def _is_bare_def_inc(arg, profile):
    # type: (str, WrapperProfile) -> bool
    return arg in {'-D', '-I'} or \
        (profile.analyzer_is_gcc_compatible and arg in GCC_INCLUDE_FLAGS)


def _is_forwardable_gcc_flag(arg, profile):
    # type: (str, WrapperProfile) -> bool
    if arg in GCC_FORWARDED_FLAGS or GCC_FORWARDED_PREFIXES.match(arg):
        return True
    return profile.analyzer_name == 'gcc' and \
        GCC_ANALYZER_PREFIXES.match(arg) is not None


def classify(arg, profile):
    # type: (str, WrapperProfile) -> str
    """ Decide what to do with a single compiler argument.

    :param arg:     the compiler argument
    :param profile: the wrapper which runs the analyzer
    :return: one of the decision constants """

    # preprocessing only, analyzer would break the caching tools
    if arg == '-E':
        return SKIP_ALL
    # tracking includes, that is not a compilation
    if arg.startswith('-M'):
        return SKIP_ALL
    # macros and include paths are passed as they are
    if _is_def_inc(arg, profile):
        return TAKE_NEXT if _is_bare_def_inc(arg, profile) else FORWARD
    if is_input_file(arg, profile.analyzer_is_cxx_ready):
        return SKIP_ALL if is_ignored_file(arg) else INPUT_FILE
    if profile.analyzer_is_gcc_compatible:
        return FORWARD if _is_forwardable_gcc_flag(arg, profile) else DROP
    # these are translated to the analyzer dialect
    if arg in GCC_INCLUDE_FLAGS:
        return REWRITE_NEXT
    return DROP


def _rewrite(flag, value):
    # type: (str, str) -> str
    """ Translate the gcc include flag and its value into a single token. """

    if flag == '-include':
        return '--include={0}'.format(value)
    return '-I{0}'.format(value)


def translate_args(args, profile):
    # type: (Iterable[str], WrapperProfile) -> Union[Translation, Skip]
    """ Filter the compiler arguments for the analyzer.

    :param args:    the compiler arguments (without the compiler name)
    :param profile: the wrapper which runs the analyzer
    :return: a Translation with the analyzer arguments or Skip """

    result = []  # type: List[str]
    input_files = 0
    iterator = iter(args)  # type: Iterator[str]
    for arg in iterator:
        decision = classify(arg, profile)
        if decision == SKIP_ALL:
            return Skip(reason='{0} is not analyzed'.format(arg))
        elif decision == FORWARD:
            result.append(arg)
        elif decision == INPUT_FILE:
            input_files += 1
            result.append(arg)
        elif decision == TAKE_NEXT:
            value = next(iterator, None)
            if value is None:
                return Skip(reason='missing value for {0}'.format(arg))
            result.extend([arg, value])
        elif decision == REWRITE_NEXT:
            value = next(iterator, None)
            # nothing to rewrite, the flag is dropped
            if value is not None:
                result.append(_rewrite(arg, value))
        # anything else is dropped

    if not input_files:
        return Skip(reason='no input files')
    return Translation(args=result)


def analyzer_command(cmd, profile, environment):
    # type: (List[str], WrapperProfile, Mapping[str, str]) -> Optional[List[str]]
    """ Create the analyzer command from the compiler command.

    The original command is not modified, the real compiler shall see the
    untouched arguments.

    :param cmd:         the compiler command (the first element is the
                        compiler name)
    :param profile:     the wrapper which runs the analyzer
    :param environment: the environment to read the user options from
    :return: the analyzer command, or None when analysis is not needed """

    translation = translate_args(cmd[1:], profile)
    if isinstance(translation, Skip):
        return None

    executable = analyzer_executable(profile, environment)
    return [executable] + translation.args + \
        list(profile.analyzer_def_args) + \
        custom_options(profile, environment)
