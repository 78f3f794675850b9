"""
PORTAL - audience targeting for a membership community portal

An in-process engine that decides what a verified member sees: which
announcements are addressed to them and which chat channels they belong to.

Architecture:
- Membership Context: Derives batch, club and event memberships from a member id
- Catalog Context: Read-only registry of announcements and channel templates
- Targeting Context: Audience visibility, channel resolution and query filtering
"""

__version__ = "0.1.0"
