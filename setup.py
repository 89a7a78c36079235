#    setup.py
#        Standard installation script
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

#type: ignore

from setuptools import setup, find_packages #type:ignore
import sys
import os

os.chdir(os.path.dirname(os.path.abspath(__file__)))

import elfmem

dependencies = [
    'appdirs==1.4.4',
    'pyelftools==0.31',
]

if sys.version_info < (3,11):
    dependencies.append("typing-extensions==4.12.2")

setup(
    name="elfmem",    # Pypi name
    python_requires='>=3.9',
    description='Static memory footprint of ELF binaries, checked against size limits',
    version=elfmem.__version__,
    author=elfmem.__author__,
    license=elfmem.__license__,

    packages=find_packages(where='.', exclude=["test", "test.*"], include=['elfmem', "elfmem.*"]),
    package_data = {
        'elfmem': ['py.typed'],
    },

    setup_requires=[],
    install_requires=dependencies,
    extras_require={
        'test': ['mypy', 'coverage', 'pytest'],
        'dev': ['mypy', 'ipdb', 'autopep8', 'coverage', 'pytest'],
    },
    entry_points={
        "console_scripts": [
            f"elfmem=elfmem.__main__:elfmem_cli",
            f"elfmem-size=elfmem.__main__:elfmem_size",
        ]
    },
)
