"""Allow running the command line interface with ``python -m minigrep``."""

from .cli import main

if __name__ == "__main__":
    main()
