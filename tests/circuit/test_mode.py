"""
Mode 조합 규칙과 LinearCombination 모드 유도 테스트.
"""

import pytest
from zkp.circuit import Environment, LinearCombination, Mode


C, PUB, PRIV = Mode.CONSTANT, Mode.PUBLIC, Mode.PRIVATE


class TestModeCombine:
    """most-private-wins 조합 표."""

    @pytest.mark.parametrize("a, b, expected", [
        (C, C, C),
        (C, PUB, PUB),
        (C, PRIV, PRIV),
        (PUB, C, PUB),
        (PUB, PUB, PUB),
        (PUB, PRIV, PRIV),
        (PRIV, C, PRIV),
        (PRIV, PUB, PRIV),
        (PRIV, PRIV, PRIV),
    ])
    def test_table(self, a, b, expected):
        assert a.combine(b) is expected

    def test_commutative(self):
        """조합은 교환법칙이 성립한다."""
        for a in Mode:
            for b in Mode:
                assert a.combine(b) is b.combine(a)

    def test_constant_is_identity(self):
        for mode in Mode:
            assert Mode.CONSTANT.combine(mode) is mode

    def test_combine_all(self):
        assert Mode.combine_all([]) is C
        assert Mode.combine_all([C, PUB, C]) is PUB
        assert Mode.combine_all([PUB, C, PRIV]) is PRIV

    def test_labels(self):
        assert [m.label for m in Mode] == ["Constant", "Public", "Private"]

    def test_predicates(self):
        assert C.is_constant() and not C.is_public()
        assert PUB.is_public() and not PUB.is_private()
        assert PRIV.is_private() and not PRIV.is_constant()


class TestLinearCombinationMode:
    """LC 모드: 항이 없으면 CONSTANT, Private 항이 있으면 PRIVATE."""

    def test_no_terms_is_constant(self):
        assert LinearCombination(5).mode is C

    def test_constant_variable_folds(self):
        env = Environment()
        k = env.new_variable(C, 7)
        lc = LinearCombination.from_variable(k)
        assert lc.mode is C
        assert lc.is_constant()
        assert lc.constant == 7

    def test_public_only(self):
        env = Environment()
        x = env.new_variable(PUB, 1)
        y = env.new_variable(PUB, 2)
        assert LinearCombination.from_variable(x).add(y).mode is PUB

    def test_private_wins(self):
        env = Environment()
        x = env.new_variable(PUB, 1)
        y = env.new_variable(PRIV, 2)
        lc = LinearCombination.from_variable(x).add(y).add(3)
        assert lc.mode is PRIV

    def test_cancelled_private_term(self):
        """Private 항이 상쇄되면 모드도 내려간다."""
        env = Environment()
        x = env.new_variable(PUB, 1)
        y = env.new_variable(PRIV, 2)
        lc = LinearCombination.from_variable(x).add(y).sub(y)
        assert lc.mode is PUB
