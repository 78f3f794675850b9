"""
Integration tests for the full member view.

Tests: Member -> memberships -> visible announcements and channels -> query filters.
"""

from dataclasses import replace

import pytest

from portal.contexts.membership import Member
from portal.contexts.targeting import (
    FacetKind,
    Query,
    build_channel_list,
    build_feed,
    build_view,
    visible_items,
)


@pytest.mark.integration
def test_demo_member_view(demo_member):
    view = build_view(demo_member)

    assert view.membership.batch_year == "2024"
    assert view.membership.institution == "Yonsei"
    assert [i.id for i in view.announcements] == ["1", "2", "3", "4", "5"]
    assert len(view.channels) == 9
    assert view.channels[0].id == "ppmk-official"
    assert "university-yonsei" in [c.id for c in view.channels]


@pytest.mark.integration
def test_unread_facet_on_demo_feed(demo_member):
    feed = build_feed(demo_member, Query(facet=FacetKind.from_label("Unread")))

    assert [i.id for i in feed] == ["1", "2", "5"]


@pytest.mark.integration
def test_reaction_facet_on_visible_feed(mara_snu_member):
    feed = build_feed(mara_snu_member, Query(facet=FacetKind.REACTION))

    # Item 6 has 12 reactions, item 3 (8) is not visible to this member anyway
    assert [i.id for i in feed] == ["1", "2", "4", "5", "6"]


@pytest.mark.integration
def test_search_respects_audience(jpa_yonsei_member, mara_snu_member):
    """Searching for targeted content never reveals it to members outside the audience."""
    assert build_feed(jpa_yonsei_member, Query(text="MARA")) == []
    assert [i.id for i in build_feed(mara_snu_member, Query(text="library"))] == ["6"]


@pytest.mark.integration
def test_empty_query_returns_audience_filtered_set(catalog, demo_member, bare_member):
    for member in (demo_member, bare_member):
        expected = visible_items(member, catalog.all())

        assert build_feed(member, Query(text="", facet=FacetKind.NONE), catalog) == expected
        assert build_feed(member, None, catalog) == expected


@pytest.mark.integration
def test_mentions_facet_uses_own_name(catalog):
    member = Member(id="PPMK001", display_name="MARA", scholarship_provider="MARA")

    feed = build_feed(member, Query(facet=FacetKind.MENTIONS), catalog)

    assert [i.id for i in feed] == ["2", "5"]


@pytest.mark.integration
def test_channels_independent_of_display_name(demo_member):
    renamed = replace(demo_member, display_name="Someone Else")

    assert build_channel_list(demo_member) == build_channel_list(renamed)


@pytest.mark.integration
def test_channel_search(demo_member):
    channels = build_channel_list(demo_member, text="club")

    assert [c.id for c in channels] == ["club-badminton-club", "club-recreational-club"]


@pytest.mark.integration
def test_member_without_memberships(bare_member):
    view = build_view(bare_member, query=Query(text="nothing matches this"))

    assert view.announcements == ()
    assert [c.id for c in view.channels] == [
        "ppmk-official",
        "batch-2024",
        "korean-language",
        "casual-chat",
    ]


@pytest.mark.integration
def test_view_is_repeatable(demo_member):
    query = Query(text="mara", facet=FacetKind.REPLIES)

    assert build_view(demo_member, query) == build_view(demo_member, query)
