"""Entry point for the memory match game.

Starts a 4x4 board with ten tries in an arcade window.
"""
from memory_match.app import main

if __name__ == "__main__":
    main()
