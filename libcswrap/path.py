# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module is responsible to find the real tool behind the wrapper.

The wrapper is installed as a symbolic link named after the compiler, and
that link directory is in front of the real compiler in the search path.
Executing the tool by name would run the wrapper again. To avoid infinite
recursion the directories which resolve the tool name to the wrapper are
removed from the search path before the real tool is executed. """

import os
import os.path
from typing import Tuple  # noqa: ignore=F401

__all__ = ['ConfigurationError', 'is_wrapper', 'remove_self_from_path',
           'sanitize_path']


class ConfigurationError(RuntimeError):
    """ The wrapper was invoked in an unsupported way. """
    pass


def is_wrapper(candidate, wrapper_name):
    # type: (str, str) -> bool
    """ Returns True when the candidate, following the symbolic links,
    is the wrapper executable itself. """

    return os.path.basename(os.path.realpath(candidate)) == wrapper_name


def remove_self_from_path(tool, path, wrapper_name):
    # type: (str, str, str) -> Tuple[bool, str]
    """ Drop every search path entry where the tool name resolves to
    the wrapper.

    :param tool:            the name the wrapper was invoked with
    :param path:            value of the search path (colon separated)
    :param wrapper_name:    the registered name of the wrapper executable
    :return: a tuple of: was any entry removed, and the sanitized path """

    if not path:
        return False, ''

    kept = []
    found = False
    for directory in path.split(os.pathsep):
        # empty entry means the current working directory
        candidate = os.path.join(directory or os.curdir, tool)
        if is_wrapper(candidate, wrapper_name):
            found = True
        else:
            kept.append(directory)

    return found, os.pathsep.join(kept)


def sanitize_path(tool, arg0, path, wrapper_name):
    # type: (str, str, str, str) -> str
    """ Returns the search path to execute the real tool with.

    :param tool:            the name the wrapper was invoked with
    :param arg0:            the first command line argument as it was given
    :param path:            value of the search path (colon separated)
    :param wrapper_name:    the registered name of the wrapper executable
    :return: the sanitized search path

    Raises ConfigurationError when the wrapper is not found in the search
    path and it was not invoked by absolute path either. """

    found, sanitized = remove_self_from_path(tool, path, wrapper_name)
    if found and sanitized:
        return sanitized

    # symlink not found in the search path, invoked by its absolute path?
    if os.path.isabs(arg0) and is_wrapper(arg0, wrapper_name):
        return sanitized if found else path

    raise ConfigurationError("symlink '{0} -> {1}' not found in $PATH ({2})"
                             .format(tool, wrapper_name, path))
