"""Shared fixtures: members and the packaged catalog and rule table."""

import pytest

from portal.contexts.catalog import load_catalog
from portal.contexts.membership import Member, load_membership_rules


@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def rules():
    return load_membership_rules()


@pytest.fixture
def demo_member():
    """Demo login: MARA scholar at Yonsei."""
    return Member(id="demo", display_name="Demo User", scholarship_provider="MARA", institution="Yonsei")


@pytest.fixture
def mara_snu_member():
    return Member(id="PPMK001", display_name="Ahmad", scholarship_provider="MARA", institution="SNU")


@pytest.fixture
def jpa_yonsei_member():
    return Member(id="PPMK002", display_name="Siti", scholarship_provider="JPA", institution="Yonsei")


@pytest.fixture
def bare_member():
    """Member with no scholarship, no institution and an id no rule matches."""
    return Member(id="GUEST", display_name="Guest")
