# setup.py - Install the properset package
from setuptools import setup, find_packages

setup(
    name="properset",
    version="0.3.0",
    description="Sets with structural equality: sets of sets, composites and cycles",
    license="MIT",
    python_requires=">=3.8",
    packages=find_packages(include=["properset", "properset.*"]),
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
