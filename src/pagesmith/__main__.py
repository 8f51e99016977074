"""Allow ``python -m pagesmith``."""

from __future__ import annotations

from pagesmith.ui.cli import main


if __name__ == "__main__":
    main()
