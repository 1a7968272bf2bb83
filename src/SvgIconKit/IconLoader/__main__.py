"""Allow ``python -m SvgIconKit.IconLoader``."""

from .cli import main

if __name__ == "__main__":
    main()
