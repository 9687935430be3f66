"""Test environment defaults, applied before any application module is imported."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
# Cheapest bcrypt cost factor keeps the suite fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")
