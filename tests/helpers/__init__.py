"""Test helpers for TaskHub.

Usage:
    from tests.helpers import add_user, login, make_actor
"""

from tests.helpers.api import SEED_PASSWORD, login
from tests.helpers.factories import TEST_JWT_SECRET, add_user, make_actor

__all__ = ["SEED_PASSWORD", "TEST_JWT_SECRET", "add_user", "login", "make_actor"]
