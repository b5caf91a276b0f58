from setuptools import setup, find_packages

setup(
    name="fast-gssh",
    version="0.2.0",
    license="MIT Licence",
    description="group ssh: run one command on many hosts in parallel",
    long_description="",
    python_requires=">=3.6",
    install_requires=[
        "ssh2-python",
        "gevent",
    ],
    extras_require={
        "test": ["pytest"],
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            'fgssh = fgslib.cli:main'
        ]
    },
    scripts=["bin/fgssh_cli.py"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
    ],
)
