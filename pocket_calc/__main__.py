"""Allow running as python -m pocket_calc."""

from .cli import main

main()
