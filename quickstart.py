# /// script
# requires-python = ">=3.12"
# dependencies = ["igview"]
# [tool.uv.sources]
# igview = { path = ".", editable = true }
# ///

"""Quick start demo for igview.

Usage:
    uv run quickstart.py ~/downloads/instagram-alice-2025-12-25-AbCd.zip
    uv run quickstart.py ~/downloads/instagram-alice-2025-12-25-AbCd/
"""

import argparse
import asyncio

from igview import load_bundle, parse_export

parser = argparse.ArgumentParser(description="igview quickstart")
parser.add_argument("path", help="Path to an Instagram export folder or zip")
parser.add_argument("--logs", action="store_true", help="Print the parser log")
args = parser.parse_args()


async def main() -> None:
    result = await parse_export(load_bundle(args.path))
    if result.insufficient_data:
        print("Could not parse Instagram data. Is this the root folder of your export?")
        return

    export = result.export
    stats = result.stats()
    print(f"@{export.profile.username}")
    print(
        f"  {stats.posts} posts, {stats.archived} archived, {stats.stories} stories, "
        f"{stats.followers} followers, {stats.following} following"
    )

    missing = result.unresolved_uris()
    print(f"  {stats.locator_keys} locator keys, {len(missing)} unresolved media URIs")
    for uri in missing[:5]:
        print(f"    - {uri}")

    if args.logs:
        print()
        print("\n".join(result.diagnostics))


asyncio.run(main())
