#!/usr/bin/env python3
"""Setup script for the Dev.to Context Engine.

Installs all required dependencies and sets up the package.
"""

from setuptools import setup, find_packages

# Read README
with open('README.md', 'r', encoding='utf-8') as f:
    long_description = f.read()

# Read requirements
requirements = [
    'numpy>=1.21.0',
    'pandas>=1.3.0',
    'matplotlib>=3.4.0',
    'PyYAML>=5.4.0',
    'requests>=2.25.0',
]

setup(
    name='devcontext',
    version='1.0.0',
    description='Structured context extraction for forum articles, authors and discussions',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Stephen Thompson',
    author_email='',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=3.0.0',
            'flake8>=4.0.0',
            'black>=22.0.0',
        ],
    },
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Text Processing :: Linguistic',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    entry_points={
        'console_scripts': [
            'devcontext-analyze=devcontext.cli:main',
        ],
    },
)
