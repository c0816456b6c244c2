"""A setuptools based setup module.

See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
import os
import re

here = os.path.abspath(os.path.dirname(__file__))

# the version is defined in one place only: hvtypes/__init__.py
with open(os.path.join(here, 'src', 'hvtypes', '__init__.py'), encoding='utf-8') as f:
    version = re.search(r"^__version__ = '([^']+)'", f.read(), re.MULTILINE).group(1)

# Get the long description from the README file
with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

dependencies = ['lxml>=4.6',
                "typing_extensions ; python_version<'3.10'"]

setup(
    name='hvtypes',
    version=version,
    description='data model of health record items with xml serialization',
    long_description=long_description,

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='health record xml data model',
    python_requires='>=3.8',

    package_dir={'': 'src'},
    packages=find_packages(where='src', include=['hvtypes', 'hvtypes.*']),

    # List run-time dependencies here.  These will be installed by pip when
    # your project is installed.
    install_requires=dependencies,
    # $ pip install -e .[test]
    extras_require={
        'test': ['pytest'],
    },
)
