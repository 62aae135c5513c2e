# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.

from . import test_config
from . import test_path
from . import test_translate
from . import test_supervisor
from . import test_signals
from . import test_wrapper
from . import test_libcswrap


def load_tests(loader, suite, pattern):
    suite.addTests(loader.loadTestsFromModule(test_config))
    suite.addTests(loader.loadTestsFromModule(test_path))
    suite.addTests(loader.loadTestsFromModule(test_translate))
    suite.addTests(loader.loadTestsFromModule(test_supervisor))
    suite.addTests(loader.loadTestsFromModule(test_signals))
    suite.addTests(loader.loadTestsFromModule(test_wrapper))
    suite.addTests(loader.loadTestsFromModule(test_libcswrap))
    return suite
