from setuptools import setup, find_packages

setup(
    name='zipfeed',
    version='0.3.0',

    author_email='atmfjstc@protonmail.com',

    package_dir={'': 'src'},
    packages=find_packages(where='src'),

    install_requires=[
        'requests>=2.25, <3',
        'jsonschema>=3, <5',
        'termcolor>=1, <4',
        'colorama>=0.4.6, <2',
    ],

    extras_require={
        'test': [
            'pytest>=6',
        ],
    },

    entry_points={
        'console_scripts': [
            'zipfeed=zipfeed.cli.main:main',
        ],
    },

    zip_safe=True,

    description="Fetch ZIP archives and paginated JSON feeds over HTTP and turn them into tables",

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Archiving",
        "Typing :: Typed",
    ],
    python_requires='>=3.7',
)
