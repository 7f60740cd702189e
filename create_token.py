"""Mint a bearer token for the mutating Commands API routes.

Usage:
    python create_token.py ops@example.com [lifetime_days]
"""
import sys

from command_api.app.core.security import create_access_token

subject = sys.argv[1] if len(sys.argv) > 1 else "admin@example.com"
# lifetime in days, 365 by default
days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": subject}, expires_delta=days * 24 * 60 * 60)
print(token)
