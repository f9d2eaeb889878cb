# #!/usr/bin/env python

"""setup.py script for py_unitconv library"""

from setuptools import setup

setup(
    name='py_unitconv',
    version='1.0.0',
    description='Unit conversion within kinds of measurement driven by per-kind conversion graphs',
    python_requires='>=3.9',
    packages=['py_unitconv'],
    package_data={
        'py_unitconv': [
            'assets/.pyuc.toml',
            'assets/units/*.toml',
        ],
    },
    include_package_data=True,
    install_requires=[
        'typing_extensions>=4.12.0',
        'tomli>=2.0.1; python_version<"3.11"',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'pyuc=py_unitconv.__main__:main',
        ],
    },
)
