#!/usr/bin/env python3

from setuptools import setup

setup(
    author="Elias Zamaria",
    description="This package recovers repeating-key XOR keys from ciphertext.",
    entry_points={"console_scripts": ["break-xor = break_xor:main"]},
    extras_require={"test": ["pytest >= 6.0"]},
    install_requires="pycryptodomex >= 3.4.2",
    license="MIT",
    name="xor-key-recovery",
    py_modules=["break_xor", "english", "repeating_xor", "util"],
    python_requires=">=3.7",
    url="https://github.com/mikez302/cryptopals_solutions",
    version="0.1.0",
)
