"""``python -m src`` runs the Outlook CLI."""

from src.cli.main import main

main()
