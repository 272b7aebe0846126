"""
Convenience entry point for running stylistbook as a module.

Usage: python -m stylistbook [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
