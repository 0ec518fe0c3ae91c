#!/usr/bin/env python3
"""
Setup script for Brochure - single-page documentation renderer.
"""

from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='brochure',
    version='1.0.0',
    author='Brochure contributors',
    description='Render one Markdown document into a themed HTML page with staged assets',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'brochure_pkg': [
            'source/layouts/*.html',
            'source/css/*.css',
            'source/img/*',
            'source/js/*',
            'source/styles/*.css',
        ],
    },
    include_package_data=True,
    install_requires=[
        'mistune>=3.0',
        'Jinja2>=3.0',
        'PyYAML>=6.0',
        'beautifulsoup4>=4.11',
        'Markdown>=3.4',
        'Pygments>=2.12',
        'rjsmin>=1.2',
        'csscompressor>=0.9.5',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Documentation',
        'Topic :: Text Processing :: Markup :: HTML',
    ],
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'brochure=brochure_pkg.cli:main',
        ],
    },
    keywords='markdown, documentation, jinja2, static site, api docs',
)
