#!/usr/bin/env python

import setuptools

setuptools.setup(
    name="paginator",
    version="0.3.0",
    author="Paginator contributors",
    description="Page-relative element descriptions for documents paginated with Vivliostyle in an embedded web view.",
    packages=setuptools.find_packages(include=["paginator", "paginator.*"]),
    package_data={
        "paginator.configs": ["*.yaml"],
        "paginator.gui": ["assets/*.js", "assets/*.html"],
    },
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Operating System :: OS Independent",
    ],
    install_requires=['PyYAML>=5.3',
                      'termcolor>=1.1.0',
                      'colorama>=0.4.4; platform_system=="Windows"',
                      'QtPy>=2.0',
                      'PyQt5>=5.15',
                      'PyQtWebEngine>=5.15',
                      ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.10',

    entry_points={
        'console_scripts': [
            'paginator = paginator.cli:main',
        ],
    },


)
