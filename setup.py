# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.2.0",
    packages=find_packages(include=["lispy", "lispy.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyparsing>=3.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
