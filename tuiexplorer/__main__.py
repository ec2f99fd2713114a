"""Module entrypoint for ``python -m tuiexplorer``.

Argument parsing and runtime setup happen in ``tuiexplorer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
