"""Allow ``python -m src.cli`` execution."""

from src.cli.query import main

main()
