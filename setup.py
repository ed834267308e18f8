from setuptools import setup

setup(
    name='atmfjstc-gmad-file',
    version='1.0.0',

    author_email='atmfjstc@protonmail.com',

    package_dir={'': 'src'},
    packages=['atmfjstc.lib.gmad_file'],

    install_requires=[
        'atmfjstc-binary-utils>=1.2.0, <2',
        'atmfjstc-file-utils>=1.1, <2',
    ],

    extras_require={
        'test': ['pytest'],
    },

    zip_safe=True,

    description="Reader for GMAD addon packages, with random-access and sequential content extraction",

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Archiving",
        "Typing :: Typed",
    ],
    python_requires='>=3.7',
)
