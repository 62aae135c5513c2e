# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.

import os
import os.path
import shutil
import tempfile


class TempDir:

    def __init__(self):
        self.name = tempfile.mkdtemp('.test', 'cswrap', None)

    def __enter__(self):
        return self.name

    def __exit__(self, exc, value, tb):
        self.cleanup()

    def cleanup(self):
        if self.name is not None:
            shutil.rmtree(self.name)


def create_script(directory, name, content):
    """ Create an executable shell script and return its path. """

    filename = os.path.join(directory, name)
    with open(filename, 'w') as handle:
        handle.write('#!/bin/sh\n')
        handle.write(content)
        handle.write('\n')
    os.chmod(filename, 0o755)
    return filename


def read_lines(filename):
    with open(filename, 'r') as handle:
        return handle.read().splitlines()
