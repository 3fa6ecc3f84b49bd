"""Entry point for 'python -m passhash' command."""

from passhash.cli import main

if __name__ == "__main__":
    main()
