"""
Main entry point for the scaffold_kit package.

When run as `python -m scaffold_kit`, it starts the command-line interface.
"""

from scaffold_kit.cli import main

if __name__ == "__main__":
    main()
