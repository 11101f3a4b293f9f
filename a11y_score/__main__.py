"""Module entrypoint for ``python -m a11y_score``."""

from a11y_score.cli import main

if __name__ == "__main__":
    main()
