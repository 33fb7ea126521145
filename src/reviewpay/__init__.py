"""ReviewPay billing and payout engine."""
