# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.

import unittest

import tests.unit


def suite():
    loader = unittest.TestLoader()
    ts = unittest.TestSuite()
    ts.addTests(loader.loadTestsFromModule(tests.unit))
    return ts
