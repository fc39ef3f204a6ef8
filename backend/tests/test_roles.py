from __future__ import annotations

import pytest

from models import AccessLevel, Credential, UserEntry
from services.roles import resolve_role

USERS = (
    UserEntry(name="client", secret="s3cr3t", role=AccessLevel.USER),
    UserEntry(name="admin", secret="ag3nt", role=AccessLevel.ADMIN),
)


def test_access_levels_are_ordered() -> None:
    assert AccessLevel.GUEST < AccessLevel.USER < AccessLevel.ADMIN
    assert AccessLevel.ADMIN >= AccessLevel.USER


@pytest.mark.parametrize(
    ("credential", "expected"),
    [
        (Credential("admin", "ag3nt"), AccessLevel.ADMIN),
        (Credential("client", "s3cr3t"), AccessLevel.USER),
        (Credential("admin", "wrong"), AccessLevel.GUEST),
        (Credential("admin", "s3cr3t"), AccessLevel.GUEST),
        (Credential("nobody", "ag3nt"), AccessLevel.GUEST),
        (Credential("admin", ""), AccessLevel.GUEST),
        (None, AccessLevel.GUEST),
    ],
)
def test_resolve_role(credential: Credential | None, expected: AccessLevel) -> None:
    assert resolve_role(credential, USERS) is expected


def test_secret_only_credential_takes_highest_matching_role() -> None:
    users = USERS + (UserEntry(name="ops", secret="s3cr3t", role=AccessLevel.ADMIN),)
    assert resolve_role(Credential(None, "s3cr3t"), users) is AccessLevel.ADMIN
    assert resolve_role(Credential(None, "ag3nt"), USERS) is AccessLevel.ADMIN
    assert resolve_role(Credential(None, "nope"), USERS) is AccessLevel.GUEST


def test_no_users_configured_resolves_guest() -> None:
    assert resolve_role(Credential("admin", "ag3nt"), ()) is AccessLevel.GUEST
