"""
Response limit semantics: Unlimited vs Capped(ceiling).
"""

import pytest

from formquota.models.domain.response_limit import (
    UNLIMITED,
    Capped,
    Unlimited,
    response_limit_from_db,
)


class TestCapped:

    def test_admits_until_ceiling(self):
        limit = Capped(2)
        assert limit.admits(0)
        assert limit.admits(1)
        assert not limit.admits(2)

    def test_exhausted_at_ceiling(self):
        limit = Capped(2)
        assert not limit.is_exhausted(1)
        assert limit.is_exhausted(2)
        assert limit.is_exhausted(3)

    def test_zero_ceiling_admits_nothing(self):
        limit = Capped(0)
        assert not limit.admits(0)
        assert limit.is_exhausted(0)

    def test_negative_ceiling_rejected(self):
        with pytest.raises(ValueError):
            Capped(-1)

    @pytest.mark.parametrize("value", [1.5, "3", True])
    def test_non_integer_ceiling_rejected(self, value):
        with pytest.raises(TypeError):
            Capped(value)


class TestUnlimited:

    def test_always_admits(self):
        assert UNLIMITED.admits(0)
        assert UNLIMITED.admits(10 ** 9)
        assert not UNLIMITED.is_exhausted(10 ** 9)

    def test_is_tagged(self):
        assert UNLIMITED.is_unlimited
        assert not Capped(5).is_unlimited
        assert Unlimited() == UNLIMITED


class TestStorageMapping:

    def test_null_is_unlimited(self):
        assert response_limit_from_db(None) is UNLIMITED
        assert UNLIMITED.to_db() is None

    def test_integer_is_capped(self):
        assert response_limit_from_db(0) == Capped(0)
        assert response_limit_from_db(7) == Capped(7)
        assert Capped(7).to_db() == 7
