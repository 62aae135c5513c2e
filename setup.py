#!/usr/bin/env python
# -*- coding: utf-8 -*-

import setuptools

with open("README.rst", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setuptools.setup(
    name='cswrap-py',
    version='1.0.0',
    keywords=['compiler wrapper', 'static analyzer', 'cppcheck', 'clang',
              'gcc'],
    license='LICENSE.TXT',
    description='compiler wrappers running static analyzers in background.',
    long_description=long_description,
    long_description_content_type="text/x-rst",
    zip_safe=False,
    python_requires=">=3.6",
    packages=['libcswrap'],
    extras_require={
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': [
            'cscppc = libcswrap.wrapper:cscppc',
            'csclng = libcswrap.wrapper:csclng',
            'csgcca = libcswrap.wrapper:csgcca'
        ]
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: University of Illinois/NCSA Open Source License",
        "Environment :: Console", "Operating System :: POSIX",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.6",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Topic :: Software Development :: Compilers",
        "Topic :: Software Development :: Quality Assurance"
    ]
)
