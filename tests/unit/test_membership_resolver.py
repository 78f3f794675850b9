"""Unit tests for membership resolution and the rule table."""

import pytest

from portal.contexts.membership import (
    MatchKind,
    Member,
    MembershipRule,
    MembershipRuleTable,
    MembershipSet,
    resolve_member,
    resolve_membership,
)


@pytest.mark.unit
@pytest.mark.parametrize("member_id", ["PPMK001", "demo", "X001Y"])
def test_first_cohort_membership(member_id):
    """Ids containing 001, and the demo sentinel, get the first cohort memberships."""
    membership = resolve_membership(member_id)

    assert membership.batch_year == "2024"
    assert membership.clubs == ("Badminton Club", "Recreational Club")
    assert membership.events == ("Hackathon: Hacktopus", "Cultural Night 2024")


@pytest.mark.unit
def test_second_and_third_cohorts():
    second = resolve_membership("PPMK002")
    third = resolve_membership("PPMK003")

    assert second == MembershipSet(
        batch_year="2023",
        clubs=("Badminton Club", "Photography Club"),
        events=("Sports Day 2024",),
    )
    assert third == MembershipSet(
        batch_year="2025",
        clubs=("Recreational Club", "Study Group"),
        events=("Hackathon: Hacktopus", "Academic Conference"),
    )


@pytest.mark.unit
def test_demo_sentinel_is_exact_match():
    """Only the literal 'demo' id is the sentinel; ids merely containing it are not."""
    assert resolve_membership("demo2").clubs == ()
    assert resolve_membership("Demo").clubs == ()


@pytest.mark.unit
def test_patterns_are_case_sensitive():
    table = MembershipRuleTable(
        baseline_batch="2024",
        rules=(MembershipRule(pattern="ABC", clubs=("Chess Club",)),),
    )

    assert resolve_membership("xABCx", table).clubs == ("Chess Club",)
    assert resolve_membership("xabcx", table).clubs == ()


@pytest.mark.unit
def test_multiple_matching_rules_are_unioned():
    """An id matching 001 and 002 collects both clubs sets without duplicates."""
    membership = resolve_membership("PPMK001-002")

    assert membership.clubs == ("Badminton Club", "Recreational Club", "Photography Club")
    assert membership.events == (
        "Hackathon: Hacktopus",
        "Cultural Night 2024",
        "Sports Day 2024",
    )
    # First matching rule that declares a batch wins
    assert membership.batch_year == "2024"


@pytest.mark.unit
def test_batch_from_first_rule_declaring_one():
    table = MembershipRuleTable(
        baseline_batch="2020",
        rules=(
            MembershipRule(pattern="A", clubs=("Club A",)),
            MembershipRule(pattern="B", batch_year="2022"),
            MembershipRule(pattern="C", batch_year="2023"),
        ),
    )

    assert resolve_membership("ABC", table).batch_year == "2022"
    assert resolve_membership("A", table).batch_year == "2020"


@pytest.mark.unit
@pytest.mark.parametrize("member_id", ["", None, "UNKNOWN", 12345, "   "])
def test_unmatched_or_malformed_ids_get_default(member_id):
    membership = resolve_membership(member_id)

    assert membership == MembershipSet(batch_year="2024", clubs=(), events=())


@pytest.mark.unit
def test_resolution_is_deterministic():
    assert resolve_membership("PPMK003") == resolve_membership("PPMK003")


@pytest.mark.unit
def test_resolve_member_carries_institution():
    member = Member(id="PPMK002", display_name="Siti", institution="Yonsei")

    membership = resolve_member(member)

    assert membership.institution == "Yonsei"
    assert membership.clubs == resolve_membership("PPMK002").clubs


@pytest.mark.unit
def test_resolve_member_without_institution():
    membership = resolve_member(Member(id="PPMK002", display_name="Siti"))

    assert membership.institution is None
    assert membership == resolve_membership("PPMK002")


@pytest.mark.unit
def test_rule_table_matching_is_inspectable(rules):
    matched = rules.matching("demo")

    assert [rule.pattern for rule in matched] == ["demo"]
    assert matched[0].match is MatchKind.EXACT
