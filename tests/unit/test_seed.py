from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from redirector.auth.passwords import verify_password
from redirector.core.permissions import PermissionCode
from redirector.models import Account
from redirector.services.errors import BootstrapError
from redirector.services.seed import ensure_default_admin


def fake_hasher(password: str) -> str:
    return f"hashed:{password}"


def all_accounts(engine):
    with Session(engine) as db:
        return db.scalars(select(Account)).all()


def test_seeds_one_admin_into_empty_table(engine):
    created = ensure_default_admin(engine, hasher=fake_hasher)

    accounts = all_accounts(engine)
    assert len(accounts) == 1
    assert created is not None and created.id == accounts[0].id
    assert accounts[0].name == "admin"
    assert accounts[0].password_hash == "hashed:pass"
    assert accounts[0].permission_code.as_flags() == (0, 1, 0, 0, 0, 0)


def test_seed_password_is_bcrypt_hashed(engine):
    ensure_default_admin(engine, password="s3cret")

    (account,) = all_accounts(engine)
    assert account.password_hash != "s3cret"
    assert verify_password("s3cret", account.password_hash)


def test_does_nothing_when_accounts_exist(engine):
    with Session(engine) as db:
        db.add(Account(id=str(uuid4()), name="alice", password_hash="x", permission=PermissionCode(own=1).encode()))
        db.commit()
    hasher = MagicMock()

    assert ensure_default_admin(engine, hasher=hasher) is None
    assert [a.name for a in all_accounts(engine)] == ["alice"]
    hasher.assert_not_called()


def test_failed_count_means_no_seed(bare_engine):
    # no auth table: the count query fails
    assert ensure_default_admin(bare_engine, hasher=fake_hasher) is None


def test_hash_failure_is_fatal(engine):
    def broken_hasher(password):
        raise ValueError("no entropy")

    with pytest.raises(BootstrapError) as exc_info:
        ensure_default_admin(engine, hasher=broken_hasher)

    assert exc_info.value.step == "seed"
    assert all_accounts(engine) == []


def test_insert_failure_is_fatal(engine, monkeypatch):
    def failing_commit(self):
        raise OperationalError("INSERT INTO auth", {}, Exception("read-only database"))

    monkeypatch.setattr(Session, "commit", failing_commit)

    with pytest.raises(BootstrapError) as exc_info:
        ensure_default_admin(engine, hasher=fake_hasher)

    assert exc_info.value.step == "seed"
