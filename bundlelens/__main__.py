"""Module entrypoint for ``python -m bundlelens``."""

from .cli import main


if __name__ == "__main__":
    main()
