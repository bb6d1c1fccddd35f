#!/usr/bin/env python

from setuptools import setup

setup(
    name='svgterminal',
    version='0.5.0',
    license='BSD 3-clause license',
    description='Generate animated SVG terminals from YAML configurations',
    long_description='Render a list of content blocks (system information, '
                     'quotes, weather, custom text...) as a self-contained '
                     'SVG animation of a terminal typing commands and '
                     'printing their output.',
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Terminals'
    ],
    python_requires='>=3.8',
    packages=[
        'svgterminal',
        'svgterminal.blocks',
        'svgterminal.tests'
    ],
    package_data={
        'svgterminal': ['data/*.yml'],
    },
    scripts=['scripts/svgterminal'],
    include_package_data=True,
    install_requires=[
        'aiohttp',
        'lxml',
        'PyYAML',
        'wcwidth',
    ],
    extras_require={
        'dev': [
            'coverage',
            'pylint',
            'twine',
            'wheel',
        ]
    }
)
