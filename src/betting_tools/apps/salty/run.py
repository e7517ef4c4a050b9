"""CLI entry point for the SaltyBet bot.

All command logic lives in the cli subpackage.
"""

from betting_tools.apps.salty.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the SaltyBet CLI application."""
    app()


if __name__ == "__main__":
    main()
