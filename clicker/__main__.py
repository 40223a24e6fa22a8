"""CLI entry point: python -m clicker"""

from clicker.cli import main

if __name__ == "__main__":
    main()
