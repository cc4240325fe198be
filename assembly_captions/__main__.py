"""Package entry point for ``python -m assembly_captions``.

HOW: Hands everything to the CLI's main(), which also handles ``--serve``.
"""

from assembly_captions.cli import main

if __name__ == "__main__":
    main()
