"""SaltyBet betting bot.

Poll the match state feed, predict winners with an Elo model, place bets
through an authenticated session, and settle ratings when matches end.
"""
