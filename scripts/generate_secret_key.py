#!/usr/bin/env python3
"""
Generate the JWT signing secret for Atlas application sessions.
Run this and copy the output to your .env file.
"""

import secrets

if __name__ == "__main__":
    print("=" * 60)
    print("Atlas Session Secret Generator")
    print("=" * 60)

    print(f"\nJWT_SECRET_KEY={secrets.token_hex(32)}")
    print("\nCopy the line above to your .env file.")
    print("Changing it signs every active session out.")
    print("=" * 60)
