import datetime as dt

import pytest

from civicstore.catalog import AccountDirectory
from civicstore.datastructures import InvalidArgumentError, KeyNotFoundError

T0 = dt.datetime(2025, 10, 25, 9, 0)


@pytest.fixture
def directory():
    d = AccountDirectory()
    d.register("Thandi@Example.org", "Thandi", "Nkosi", phone_number="+27 21 555 0100", created_at=T0)
    d.register("sam@example.org", "Sam", "Jacobs", created_at=T0)
    return d


def test_register_assigns_sequential_ids(directory):
    assert len(directory) == 2
    assert [u.id for u in directory] == [1, 2]
    assert directory.get(2).email == "sam@example.org"


def test_emails_are_case_insensitive(directory):
    user = directory.profile("THANDI@example.ORG")
    assert user.email == "thandi@example.org"
    assert user.full_name == "Thandi Nkosi"
    assert "  thandi@example.org " in directory


def test_duplicate_email_rejected(directory):
    with pytest.raises(InvalidArgumentError):
        directory.register("SAM@example.org", "Other", "Person")
    assert len(directory) == 2
    # the failed registration did not consume an id
    assert directory.register("lee@example.org", "Lee", "Adams").id == 3


@pytest.mark.parametrize("kwargs", [
    dict(email="not-an-email", first_name="A", last_name="B"),
    dict(email="", first_name="A", last_name="B"),
    dict(email="a@example.org", first_name=" ", last_name="B"),
    dict(email="a@example.org", first_name="A", last_name="B" * 51),
    dict(email="a@example.org", first_name="A", last_name="B", phone_number="call me"),
])
def test_register_validates(kwargs):
    d = AccountDirectory()
    with pytest.raises(InvalidArgumentError):
        d.register(**kwargs)
    assert len(d) == 0


def test_lookup_missing_account(directory):
    assert directory.find("ghost@example.org") == (None, False)
    with pytest.raises(KeyNotFoundError):
        directory.profile("ghost@example.org")
    with pytest.raises(KeyNotFoundError):
        directory.get(99)


def test_record_login_and_deactivate(directory):
    when = T0 + dt.timedelta(hours=1)
    user = directory.record_login("sam@example.org", when)
    assert user.last_login_at == when
    directory.deactivate("sam@example.org")
    assert directory.profile("sam@example.org").is_active is False
    with pytest.raises(InvalidArgumentError):
        directory.record_login("sam@example.org")
