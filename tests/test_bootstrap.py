from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from ptj.auth import verify_password
from ptj.bootstrap import seed_reference_data, wait_for_database
from ptj.config import settings
from ptj.database import engine
from ptj.models import ApplicationStatusLookup, Role, RoleName, User


def test_seeding_is_idempotent(db):
    seed_reference_data(db, settings)
    seed_reference_data(db, settings)

    assert sorted(role.name for role in db.query(Role).all()) == sorted(RoleName.ALL)
    assert db.query(ApplicationStatusLookup).count() == 9
    admins = db.query(User).filter(User.email == settings.default_admin_email).all()
    assert len(admins) == 1
    assert admins[0].role_names == [RoleName.ADMIN]
    assert verify_password(settings.default_admin_password, admins[0].password_hash)


def test_wait_for_database_succeeds_on_live_engine():
    wait_for_database(engine, attempts=1)


def test_wait_for_database_gives_up_after_attempts():
    broken = MagicMock()
    broken.connect.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

    with pytest.raises(OperationalError):
        wait_for_database(broken, attempts=1)
    assert broken.connect.call_count == 1
