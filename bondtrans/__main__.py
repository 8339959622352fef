"""
Entry point for running bondtrans as a module.

Usage:
    python -m bondtrans --help
    python -m bondtrans translate emissions.json --kind bond-emission --lang zh
    python -m bondtrans terms --search bond
"""
from .cli import app


if __name__ == "__main__":
    app()
