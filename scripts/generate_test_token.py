#!/usr/bin/env python3
"""Generate JWT tokens for the seeded accounts, for manual API testing."""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.auth import create_access_token
from src.domain.reference_data import SEED_USERS

for user in SEED_USERS:
    token = create_access_token(user["id"], role=user["role"], email=user["email"])
    print(f"{user['name']} ({user['role']}):\n{token}\n")
