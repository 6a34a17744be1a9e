"""
Interactive CLI for checking which Atlas maps a viewer can see.
Resolves an organisation's maps anonymously, then again after sign-in.
"""

import asyncio
import getpass

from atlas_access.config import ARCGIS_PORTAL_URL, configure_logging
from atlas_access.database import init_engine
from atlas_access.directory import load_session_context, load_org_maps
from atlas_access.models import ResolutionResult, Viewer
from atlas_access.platform import PlatformClient
from atlas_access.resolver import VisibilityResolver
from atlas_access.token_store import InMemoryTokenStore, viewer_for


def format_result(result: ResolutionResult) -> str:
    """Render a ResolutionResult as console text."""
    lines = []
    if not result.accessible:
        lines.append("  (no accessible maps)")
    for i, m in enumerate(result.accessible, 1):
        marker = "*" if i == 1 else " "
        lines.append(f" {marker}{i}. {m.title or m.name}  [{m.item_id or 'no item id'}]")
    lines.append(
        f"  public={len(result.public)} restricted={len(result.private)} "
        f"login_required={result.login_required} map_picker={result.show_map_picker}"
    )
    return "\n".join(lines)


async def _prompt(label: str, secret: bool = False) -> str:
    reader = getpass.getpass if secret else input
    value = await asyncio.to_thread(reader, label)
    return value.strip()


async def run(engine, org_id: str) -> None:
    maps = load_org_maps(engine, org_id)
    print(f"\n[maps] {len(maps)} configured map(s) for org '{org_id}'")

    async with PlatformClient() as client:
        resolver = VisibilityResolver(client)

        result = await resolver.update(maps, Viewer())
        print("\n[anonymous]")
        print(format_result(result))

        try:
            api_key = await _prompt("\nEnter access key to sign in (blank to finish): ", secret=True)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            return
        if not api_key:
            return

        try:
            ctx = load_session_context(engine, api_key)
        except ValueError as e:
            print("\n[ERROR] Login failed.")
            print("Details:", e)
            return

        if ctx.org_id != org_id:
            print(f"\n[WARN] {ctx.display_name} belongs to org '{ctx.org_id}'; session does not apply here.")
            return

        print(f"\n[auth] Logged in as: {ctx.display_name}")
        store = InMemoryTokenStore()
        result = await resolver.update(maps, viewer_for(True, ctx.linked_platform_username, store))
        print("\n[signed in]")
        print(format_result(result))

        if not ctx.linked_platform_username:
            print("\n[auth] No linked ArcGIS account; restricted platform maps stay hidden.")
            return

        try:
            token = await _prompt(f"\nArcGIS token for {ctx.linked_platform_username} (blank to finish): ", secret=True)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            return
        if not token:
            return

        store.store_token(token, username=ctx.linked_platform_username)
        result = await resolver.update(maps, viewer_for(True, ctx.linked_platform_username, store))
        print("\n[signed in + ArcGIS]")
        print(format_result(result))


def main():
    print("=== Atlas Map Visibility Checker ===")
    print(f"[init] Platform portal: {ARCGIS_PORTAL_URL}")
    configure_logging()

    engine = init_engine()

    try:
        org_id = input("Organisation id (or 'quit'): ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\nExiting.")
        return

    if not org_id or org_id.lower() in {"quit", "exit"}:
        print("Goodbye.")
        return

    try:
        asyncio.run(run(engine, org_id))
    except ValueError as e:
        print("\n[ERROR] Invalid map configuration.")
        print("Details:", e)


if __name__ == "__main__":
    main()
