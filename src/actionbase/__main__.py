"""Entry point for 'python -m actionbase'."""

from actionbase.cli import main

if __name__ == "__main__":
    main()
