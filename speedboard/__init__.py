"""Personal-best reconciliation and leaderboard service."""
