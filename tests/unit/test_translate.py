# -*- coding: utf-8 -*-
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.

import unittest

import libcswrap.translate as sut
from libcswrap.config import CSCPPC, CSCLNG, CSGCCA

ALL_PROFILES = (CSCPPC, CSCLNG, CSGCCA)


class InputFileTest(unittest.TestCase):

    def test_c_sources(self):
        self.assertTrue(sut.is_input_file('main.c', False))
        self.assertTrue(sut.is_input_file('src/main.c', True))

    def test_cxx_sources(self):
        for name in ['a.C', 'a.cc', 'a.cpp', 'a.cxx']:
            self.assertTrue(sut.is_input_file(name, True))
            self.assertFalse(sut.is_input_file(name, False))

    def test_not_sources(self):
        self.assertFalse(sut.is_input_file('Makefile', True))
        self.assertFalse(sut.is_input_file('main.o', True))
        self.assertFalse(sut.is_input_file('main.c.o', True))
        self.assertFalse(sut.is_input_file('main.h', True))
        self.assertFalse(sut.is_input_file('-Wl,main.c', True))

    def test_ignored_files(self):
        self.assertTrue(sut.is_ignored_file('conftest.c'))
        self.assertTrue(sut.is_ignored_file('_configtest.c'))
        self.assertTrue(sut.is_ignored_file('../test.c'))
        self.assertTrue(sut.is_ignored_file(
            '/build/CMakeFiles/CMakeTmp/CheckSymbolExists.c'))
        self.assertFalse(sut.is_ignored_file('test.c'))
        self.assertFalse(sut.is_ignored_file('src/conftest.cc'))


class SkipTest(unittest.TestCase):

    def assertSkip(self, args, profile):
        result = sut.translate_args(args, profile)
        self.assertIsInstance(result, sut.Skip, msg=repr(args))

    def test_preprocess_only(self):
        for profile in ALL_PROFILES:
            self.assertSkip(['-E', 'a.c'], profile)
            self.assertSkip(['a.c', '-DX', '-E'], profile)

    def test_dependency_generation(self):
        for profile in ALL_PROFILES:
            self.assertSkip(['-M', 'a.c'], profile)
            self.assertSkip(['-MM', 'a.c'], profile)
            self.assertSkip(['-c', 'a.c', '-MD', '-MF', 'a.d'], profile)

    def test_no_input_files(self):
        for profile in ALL_PROFILES:
            self.assertSkip([], profile)
            self.assertSkip(['-o', 'prog', 'a.o', 'b.o', '-lm'], profile)
            self.assertSkip(['--version'], profile)

    def test_ignored_file_forces_skip(self):
        for profile in ALL_PROFILES:
            self.assertSkip(['conftest.c'], profile)
            self.assertSkip(['a.c', 'conftest.c'], profile)
            self.assertSkip(['_configtest.c', 'a.c'], profile)
            self.assertSkip(['-c', 'CMakeFiles/CMakeTmp/src.c'], profile)

    def test_cxx_file_for_c_only_analyzer(self):
        self.assertSkip(['-c', 'main.cpp'], CSGCCA)

    def test_bare_flag_without_value(self):
        for profile in ALL_PROFILES:
            self.assertSkip(['a.c', '-D'], profile)
            self.assertSkip(['a.c', '-I'], profile)
        self.assertSkip(['a.c', '-isystem'], CSCLNG)
        self.assertSkip(['a.c', '-include'], CSGCCA)

    def test_skip_has_reason(self):
        result = sut.translate_args(['-c', 'a.c', '-E'], CSCPPC)
        self.assertEqual('-E is not analyzed', result.reason)


class DialectMismatchTest(unittest.TestCase):

    def translate(self, args):
        result = sut.translate_args(args, CSCPPC)
        self.assertIsInstance(result, sut.Translation)
        return result.args

    def test_include_paths_rewritten(self):
        self.assertEqual(['-IFOO', 'a.c'],
                         self.translate(['-iquote', 'FOO', 'a.c']))
        self.assertEqual(['-IFOO', 'a.c'],
                         self.translate(['-isystem', 'FOO', 'a.c']))

    def test_include_file_rewritten(self):
        self.assertEqual(['--include=config.h', 'a.c'],
                         self.translate(['-include', 'config.h', 'a.c']))

    def test_trailing_include_flag_dropped(self):
        self.assertEqual(['a.c'], self.translate(['a.c', '-iquote']))
        self.assertEqual(['a.c'], self.translate(['a.c', '-include']))

    def test_macros_and_includes_passed(self):
        self.assertEqual(['-DX=1', '-Iinc', '-D', 'Y', '-I', 'dir', 'a.c'],
                         self.translate(['-DX=1', '-Iinc', '-D', 'Y',
                                         '-I', 'dir', 'a.c']))

    def test_compiler_flags_dropped(self):
        self.assertEqual(['a.c'],
                         self.translate(['-c', '-m32', '-O2', '-std=c99',
                                         '-Wall', '-g', '-o', 'a.o', 'a.c']))

    def test_multiple_files(self):
        self.assertEqual(['a.c', 'b.cpp'], self.translate(['a.c', 'b.cpp']))


class DialectMatchTest(unittest.TestCase):

    def translate(self, args, profile=CSCLNG):
        result = sut.translate_args(args, profile)
        self.assertIsInstance(result, sut.Translation)
        return result.args

    def test_bare_flags_forwarded(self):
        self.assertEqual(['-D', 'X', '-I', 'inc', 'a.c'],
                         self.translate(['-D', 'X', '-I', 'inc', 'a.c']))

    def test_value_looking_like_source_file(self):
        self.assertEqual(['-include', 'pre.c', 'a.c'],
                         self.translate(['-include', 'pre.c', 'a.c']))

    def test_gcc_include_flags_forwarded(self):
        args = ['-include', 'config.h', '-iquote', 'q', '-isystem', 's',
                'a.c']
        self.assertEqual(args, self.translate(args))

    def test_allowed_flags_forwarded(self):
        args = ['-m16', '-m32', '-m64', '-O0', '-Os', '-std=gnu99',
                '-fexceptions', '-fno-exceptions', 'a.cc']
        self.assertEqual(args, self.translate(args))

    def test_other_flags_dropped(self):
        self.assertEqual(['-O2', 'a.c'],
                         self.translate(['-c', '-Wall', '-fPIC', '-g', '-O2',
                                         '-Wno-unused', '-pipe', '-o', 'a.o',
                                         'a.c', '-lm']))

    def test_gcc_analyzer_gets_feature_flags(self):
        self.assertEqual(['-fPIC', '-Wno-unused', '-O2', 'a.c'],
                         self.translate(['-c', '-Wall', '-fPIC',
                                         '-Wno-unused', '-O2', 'a.c'],
                                        CSGCCA))

    def test_input_not_modified(self):
        args = ['-c', '-iquote', 'FOO', '-Wall', 'a.c']
        saved = list(args)
        sut.translate_args(args, CSCPPC)
        sut.translate_args(args, CSCLNG)
        self.assertEqual(saved, args)


class AnalyzerCommandTest(unittest.TestCase):

    def test_skip(self):
        self.assertIsNone(sut.analyzer_command(['gcc', '-E', 'a.c'],
                                               CSCPPC, {}))

    def test_default_arguments_appended(self):
        result = sut.analyzer_command(['gcc', '-c', '-DX', 'a.c'], CSCPPC, {})
        self.assertEqual(['cppcheck', '-DX', 'a.c'] +
                         list(CSCPPC.analyzer_def_args), result)

    def test_custom_options_appended(self):
        environment = {'CSCLNG_ADD_OPTS': '-Xanalyzer:-analyzer-stats'}
        result = sut.analyzer_command(['cc', 'a.c'], CSCLNG, environment)
        self.assertEqual(['clang', 'a.c'] + list(CSCLNG.analyzer_def_args) +
                         ['-Xanalyzer', '-analyzer-stats'], result)

    def test_analyzer_name_override(self):
        environment = {'CSGCCA_ANALYZER_BIN': '/opt/gcc/bin/gcc'}
        result = sut.analyzer_command(['cc', 'a.c'], CSGCCA, environment)
        self.assertEqual('/opt/gcc/bin/gcc', result[0])

    def test_compiler_command_not_modified(self):
        cmd = ['gcc', '-isystem', 'FOO', 'a.c']
        saved = list(cmd)
        sut.analyzer_command(cmd, CSCPPC, {'CSCPPC_ADD_OPTS': 'x'})
        self.assertEqual(saved, cmd)
