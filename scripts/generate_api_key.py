#!/usr/bin/env python3
"""
Generate API keys for Atlas users.
Creates secure random keys that can be inserted into dbo.atlas_users.
"""

import secrets
import string
import sys


def generate_api_key(prefix="atlas", length=32):
    """Generate a secure random API key."""
    chars = string.ascii_letters + string.digits
    return f"{prefix}_" + "".join(secrets.choice(chars) for _ in range(length))


if __name__ == "__main__":
    org_id = sys.argv[1] if len(sys.argv) > 1 else "my-org"

    print("=" * 70)
    print("Atlas API Key Generator")
    print("=" * 70)

    staff_key = generate_api_key()
    linked_key = generate_api_key()

    print("\n-- Staff user (application session only):")
    print(f"""
INSERT INTO dbo.atlas_users
    (display_name, org_id, linked_arcgis_username, api_key, is_active)
VALUES
    ('Records Clerk', '{org_id}', NULL, '{staff_key}', 1);
""")

    print("-- GIS analyst linked to an ArcGIS account:")
    print(f"""
INSERT INTO dbo.atlas_users
    (display_name, org_id, linked_arcgis_username, api_key, is_active)
VALUES
    ('GIS Analyst', '{org_id}', 'analyst_{org_id}', '{linked_key}', 1);
""")

    print("=" * 70)
    print("Note: Run these SQL statements in your database to create users.")
    print("=" * 70)
