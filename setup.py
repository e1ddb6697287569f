#!/usr/bin/env python

import re

from setuptools import setup


version = ''
with open('osslite/__init__.py', 'r') as fd:
    version = re.search(r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                        fd.read(), re.MULTILINE).group(1)

if not version:
    raise RuntimeError('Cannot find version information')


with open('README.rst', 'rb') as f:
    readme = f.read().decode('utf-8')

setup(
    name='osslite',
    version=version,
    description='Lightweight OSS (Object Storage Service) client with sync and asyncio transports',
    long_description=readme,
    packages=['osslite'],
    install_requires=['requests>=2.28',
                      'crcmod>=1.7',
                      'aiohttp>=3.8'],
    extras_require={
        'test': ['mock>=4.0'],
    },
    python_requires='>=3.8',
    include_package_data=True,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12'
    ]
)
