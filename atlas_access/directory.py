"""
Tenant directory – signed-in users and organisation map lists.
"""

from typing import List

from sqlalchemy import text

from atlas_access.config import ACCESS_PUBLIC, SUPPORTED_ACCESS_VALUES
from atlas_access.models import MapConfig, SessionContext


def load_session_context(engine, api_key: str) -> SessionContext:
    """Look up a user by API key and return their SessionContext."""
    sql = text("""
        SELECT TOP 1 id, display_name, org_id, linked_arcgis_username
        FROM dbo.atlas_users
        WHERE api_key = :k AND is_active = 1
    """)
    with engine.connect() as conn:
        row = conn.execute(sql, {"k": api_key}).mappings().first()

    if not row:
        raise ValueError("Invalid key or user inactive (no match in dbo.atlas_users).")

    linked = str(row["linked_arcgis_username"] or "").strip()
    return SessionContext(
        user_id=int(row["id"]),
        display_name=str(row["display_name"]),
        org_id=str(row["org_id"]),
        linked_platform_username=linked or None,
    )


def map_from_row(row) -> MapConfig:
    """Build a MapConfig from a dbo.atlas_maps row."""
    access = str(row["access"] or ACCESS_PUBLIC).strip().lower()
    if access not in SUPPORTED_ACCESS_VALUES:
        raise ValueError(f"Unsupported access '{row['access']}' on map '{row['name']}'.")

    return MapConfig(
        name=str(row["name"]),
        item_id=row["item_id"],
        access=access,
        portal_url=row["portal_url"] or None,
        title=row["title"] or None,
    )


def load_org_maps(engine, org_id: str) -> List[MapConfig]:
    """Return the organisation's configured maps in display order."""
    sql = text("""
        SELECT name, title, item_id, portal_url, access
        FROM dbo.atlas_maps
        WHERE org_id = :org
        ORDER BY sort_order, name
    """)
    with engine.connect() as conn:
        rows = conn.execute(sql, {"org": org_id}).mappings().all()

    return [map_from_row(r) for r in rows]
