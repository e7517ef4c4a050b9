"""Command-line front end for the SaltyBet bot."""
