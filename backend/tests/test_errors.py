import pytest
from sqlalchemy import exc as sa_exc

from core.errors import (
    ConstraintViolation,
    ResourceExhaustion,
    TransientStoreFailure,
    store_errors,
    translate_store_error,
)


def test_integrity_error_is_constraint_violation():
    error = sa_exc.IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
    translated = translate_store_error(error)
    assert isinstance(translated, ConstraintViolation)
    assert "FOREIGN KEY" in translated.message


def test_pool_timeout_is_resource_exhaustion():
    assert isinstance(translate_store_error(sa_exc.TimeoutError()), ResourceExhaustion)


def test_operational_error_is_transient():
    error = sa_exc.OperationalError("SELECT 1", {}, Exception("connection reset"))
    assert isinstance(translate_store_error(error), TransientStoreFailure)


def test_store_errors_chains_original():
    original = sa_exc.InterfaceError("SELECT 1", {}, Exception("closed"))
    with pytest.raises(TransientStoreFailure) as info:
        with store_errors():
            raise original
    assert info.value.__cause__ is original


def test_store_errors_passes_other_exceptions():
    with pytest.raises(KeyError):
        with store_errors():
            raise KeyError("x")
