"""Unit tests for the audience visibility predicate."""

from datetime import datetime

import pytest
from loguru import logger

from portal.contexts.catalog import (
    ContentItem,
    General,
    InstitutionTargeted,
    ScholarshipTargeted,
    UnknownAudience,
)
from portal.contexts.membership import Member
from portal.contexts.targeting import is_visible, visible_items

MEMBERS = [
    Member(id="m1", display_name="A"),
    Member(id="m2", display_name="B", scholarship_provider="MARA"),
    Member(id="m3", display_name="C", institution="Yonsei"),
    Member(id="m4", display_name="D", scholarship_provider="JPA", institution="SNU"),
    Member(id="m5", display_name="E", scholarship_provider="mara", institution="yonsei"),
]


def make_item(audience, item_id="x") -> ContentItem:
    return ContentItem(
        id=item_id,
        title="Title",
        body="Body",
        audience=audience,
        timestamp=datetime(2025, 1, 1),
        author="Admin",
    )


@pytest.mark.unit
@pytest.mark.parametrize("member", MEMBERS, ids=lambda m: m.id)
def test_general_visible_to_everyone(member):
    assert is_visible(member, make_item(General()))


@pytest.mark.unit
@pytest.mark.parametrize("member", MEMBERS, ids=lambda m: m.id)
def test_scholarship_targeted_exact_match(member):
    item = make_item(ScholarshipTargeted("MARA"))

    assert is_visible(member, item) == (member.scholarship_provider == "MARA")


@pytest.mark.unit
@pytest.mark.parametrize("member", MEMBERS, ids=lambda m: m.id)
def test_institution_targeted_exact_match(member):
    item = make_item(InstitutionTargeted("Yonsei"))

    assert is_visible(member, item) == (member.institution == "Yonsei")


@pytest.mark.unit
def test_absent_attribute_never_matches():
    """A member without a scholarship never sees scholarship-targeted content, even an empty target."""
    member = Member(id="m", display_name="N")

    assert not is_visible(member, make_item(ScholarshipTargeted("")))
    assert not is_visible(member, make_item(InstitutionTargeted("")))


@pytest.mark.unit
@pytest.mark.parametrize("member", MEMBERS, ids=lambda m: m.id)
def test_unknown_audience_fails_closed(member):
    assert not is_visible(member, make_item(UnknownAudience("alumni")))


@pytest.mark.unit
def test_unknown_audience_logs_warning():
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        is_visible(MEMBERS[0], make_item(UnknownAudience("alumni"), item_id="z"))
    finally:
        logger.remove(handler_id)

    assert len(messages) == 1
    assert "Item z has unrecognized audience" in messages[0]


@pytest.mark.unit
def test_visibility_is_repeatable():
    item = make_item(ScholarshipTargeted("MARA"))
    member = MEMBERS[1]

    results = {is_visible(member, item) for _ in range(5)}

    assert results == {True}


@pytest.mark.unit
def test_visible_items_preserves_order(catalog, demo_member):
    visible = visible_items(demo_member, catalog.all())

    assert [item.id for item in visible] == ["1", "2", "3", "4", "5"]


@pytest.mark.unit
def test_visible_items_per_member(catalog, mara_snu_member, jpa_yonsei_member, bare_member):
    assert [i.id for i in visible_items(mara_snu_member, catalog.all())] == ["1", "2", "4", "5", "6"]
    assert [i.id for i in visible_items(jpa_yonsei_member, catalog.all())] == ["1", "3", "4"]
    assert [i.id for i in visible_items(bare_member, catalog.all())] == ["1", "4"]


@pytest.mark.unit
def test_visible_items_empty_input(demo_member):
    assert visible_items(demo_member, []) == []
