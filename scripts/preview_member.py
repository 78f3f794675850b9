#!/usr/bin/env python3
"""
Preview what a member sees: announcements and channels.

Usage:
    python scripts/preview_member.py PPMK001 --name "Aisyah" --scholarship MARA --institution SNU
    python scripts/preview_member.py demo --scholarship MARA --institution Yonsei --facet Unread
    python scripts/preview_member.py PPMK002 --search library --channel-search club
"""

from pathlib import Path
from typing import Optional

import typer

from portal.contexts.membership import Member
from portal.contexts.targeting import FacetKind, Query, build_view
from portal.contexts.targeting.logger import setup_targeting_logger

app = typer.Typer(help="Preview the announcements and channels resolved for a member.")


@app.command()
def main(
    member_id: str = typer.Argument(..., help="Member identifier (e.g., PPMK001, demo)"),
    name: str = typer.Option("Demo User", "--name", help="Display name"),
    scholarship: Optional[str] = typer.Option(None, "--scholarship", help="Scholarship provider"),
    institution: Optional[str] = typer.Option(None, "--institution", help="Host institution"),
    search: Optional[str] = typer.Option(None, "--search", help="Announcement search text"),
    facet: str = typer.Option("None", "--facet", help="Unread, Mentions, Replies or Reaction"),
    channel_search: Optional[str] = typer.Option(
        None, "--channel-search", help="Channel search text"
    ),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for the log file"),
):
    """Resolve memberships, announcements and channels for one member."""
    setup_targeting_logger(log_dir, Member=member_id)

    member = Member(
        id=member_id,
        display_name=name,
        scholarship_provider=scholarship,
        institution=institution,
    )
    query = Query(text=search, facet=FacetKind.from_label(facet))
    view = build_view(member, query=query, channel_text=channel_search)

    typer.echo("\n=== Membership ===")
    typer.echo(f"  batch: {view.membership.batch_year}")
    typer.echo(f"  clubs: {', '.join(view.membership.clubs) or '(none)'}")
    typer.echo(f"  events: {', '.join(view.membership.events) or '(none)'}")

    typer.echo(f"\n=== Announcements ({len(view.announcements)}) ===")
    for item in view.announcements:
        status = "read" if item.read_state else "unread"
        typer.echo(f"  [{item.priority.value}] {item.title} ({status})")
        typer.echo(
            f"      {item.author} | {item.engagement.reaction_count} reactions, "
            f"{item.engagement.comment_count} comments"
        )

    typer.echo(f"\n=== Channels ({len(view.channels)}) ===")
    for channel in view.channels:
        badge = f" ({channel.unread_count} unread)" if channel.unread_count else ""
        typer.echo(f"  {channel.id}: {channel.display_name}{badge}")
        typer.echo(f"      {channel.member_count} members | {channel.preview}")

    if not view.announcements:
        typer.secho("\nNo announcements match this query", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
