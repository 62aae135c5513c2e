# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module holds the constants which distinguish one wrapper from the
other, and the helpers to read the run-time knobs from the environment.

Every wrapper shares the same core. What differs is the analyzer it runs
in the background, the default analyzer arguments and the names of the
environment variables it listens to. """

import collections
from typing import Mapping, List  # noqa: ignore=F401

__all__ = ['WrapperProfile', 'CSCPPC', 'CSCLNG', 'CSGCCA', 'PROFILES',
           'debug_enabled', 'custom_options', 'analyzer_executable']

WrapperProfile = collections.namedtuple('WrapperProfile', [
    'wrapper_name',
    'analyzer_name',
    'analyzer_is_gcc_compatible',
    'analyzer_is_cxx_ready',
    'analyzer_def_args',
    'debug_envvar',
    'addopts_envvar',
    'analyzer_bin_envvar',
    'compiler_del_args'])

CSCPPC = WrapperProfile(
    wrapper_name='cscppc',
    analyzer_name='cppcheck',
    analyzer_is_gcc_compatible=False,
    analyzer_is_cxx_ready=True,
    analyzer_def_args=(
        '-D__GNUC__',
        '-D__STDC__',
        '--inline-suppr',
        '--quiet',
        '--template={file}:{line}: {severity}: {id}: {message}'),
    debug_envvar='DEBUG_CSCPPC',
    addopts_envvar='CSCPPC_ADD_OPTS',
    analyzer_bin_envvar=None,
    compiler_del_args=())

CSCLNG = WrapperProfile(
    wrapper_name='csclng',
    analyzer_name='clang',
    analyzer_is_gcc_compatible=True,
    analyzer_is_cxx_ready=True,
    analyzer_def_args=(
        '--analyze',
        '-Qunused-arguments',
        '-Xanalyzer', '-analyzer-output=text'),
    debug_envvar='DEBUG_CSCLNG',
    addopts_envvar='CSCLNG_ADD_OPTS',
    analyzer_bin_envvar=None,
    # the real compiler does not understand the analyzer switch
    compiler_del_args=('--analyze',))

CSGCCA = WrapperProfile(
    wrapper_name='csgcca',
    analyzer_name='gcc',
    analyzer_is_gcc_compatible=True,
    analyzer_is_cxx_ready=False,
    analyzer_def_args=(
        '-fanalyzer',
        '-fdiagnostics-path-format=separate-events',
        '-fno-diagnostics-show-caret',
        '-c', '-o', '/dev/null'),
    debug_envvar='DEBUG_CSGCCA',
    addopts_envvar='CSGCCA_ADD_OPTS',
    analyzer_bin_envvar='CSGCCA_ANALYZER_BIN',
    # analysis runs in background, do not slow down the build itself
    compiler_del_args=('-fanalyzer',))

PROFILES = {profile.wrapper_name: profile
            for profile in (CSCPPC, CSCLNG, CSGCCA)}


def debug_enabled(profile, environment):
    # type: (WrapperProfile, Mapping[str, str]) -> bool
    """ Run-time debugging is on when the variable has non-empty value. """

    return bool(environment.get(profile.debug_envvar))


def custom_options(profile, environment):
    # type: (WrapperProfile, Mapping[str, str]) -> List[str]
    """ Read the user supplied analyzer options.

    The value is a colon separated list, each segment becomes a single
    argument of the analyzer. Missing or empty value means no options. """

    value = environment.get(profile.addopts_envvar)
    return value.split(':') if value else []


def analyzer_executable(profile, environment):
    # type: (WrapperProfile, Mapping[str, str]) -> str
    """ The analyzer binary to run, which might be overridden by the user. """

    if profile.analyzer_bin_envvar:
        override = environment.get(profile.analyzer_bin_envvar)
        if override:
            return override
    return profile.analyzer_name
