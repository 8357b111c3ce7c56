"""Module entrypoint for ``python -m companionfile``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and resolution setup happen in ``companionfile.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
