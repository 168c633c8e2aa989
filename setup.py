#!/usr/bin/env python3

from pathlib import Path
from setuptools import setup

version = (Path(__file__).parent / 'VERSION').read_text().strip()

setup(
    name='wordpass',
    version=version,
    description='Memorable random password generator',
    packages=['wordpass'],
    package_data={'wordpass': ['words.txt']},
    python_requires='>=3.8',
    install_requires=[
        'requests',
        'blessed',
        'pyperclip',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'wordpass = wordpass.main:main',
        ],
    },
)
