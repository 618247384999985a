from setuptools import setup, find_packages
import re

# Read version from optcalc/__init__.py
with open('optcalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='option-calc',
    version=version,
    packages=find_packages(include=['optcalc', 'optcalc.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'requests>=2.28',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'option-calc=optcalc.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Stock option grant vesting and profit estimates.',
    python_requires='>=3.10',
)
