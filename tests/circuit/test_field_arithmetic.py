"""
Field 가젯 산술 연산 테스트.

테스트 대상:
  - 선형 연산 (add/sub/neg/double): 제약 0
  - mul / square: 제약 1, 상수 피연산자 접힘
  - inverse / div / div_unchecked: 상수 0 → 즉시 오류, Private 0 → 지연된 불만족
  - square_root: 짝수 근, 비잉여
  - pow: 상수/변수 지수
  - is_equal / is_not_equal: 제약 2
  - ternary: 제약 1, 접힘
  - 기본 시나리오: a = 0, b = 1
"""

import pytest
from zkp.circuit import (
    ArithmeticUndefinedError,
    Boolean,
    CURVE_ORDER,
    Environment,
    Field,
    ForeignReferenceError,
    FR,
    Mode,
)
from zkp.circuit.field import is_quadratic_residue, sqrt


MODES = [Mode.CONSTANT, Mode.PUBLIC, Mode.PRIVATE]


def cost(env, fn):
    """fn 실행 전후의 제약 수 차이."""
    before = env.num_constraints
    result = fn()
    return result, env.num_constraints - before


def _first_non_residue():
    n = 2
    while is_quadratic_residue(n):
        n += 1
    return n


# ─────────────────────────────────────────────────────────────────────
# 기본 시나리오 (a = 0, b = 1)
# ─────────────────────────────────────────────────────────────────────

class TestScenario:

    def test_basic_values(self, env, operands):
        a, b = operands
        assert a.add(b).value == FR(1)
        assert a.mul(b).value == FR(0)
        assert a.div(b).value == FR(0)
        assert Field.ternary(Boolean.constant(env, True), a, b) is a
        assert Field.ternary(Boolean.constant(env, False), a, b) is b
        assert env.is_satisfied()

    def test_is_less_than(self, env, operands):
        a, b = operands
        assert a.is_less_than(b).value is True
        assert env.is_satisfied()

    def test_private_ternary(self, env, operands):
        a, b = operands
        for cond, expected in [(True, a), (False, b)]:
            condition = Boolean.new(env, Mode.PRIVATE, cond)
            assert Field.ternary(condition, a, b).value == expected.value
        assert env.is_satisfied()


# ─────────────────────────────────────────────────────────────────────
# 선형 연산
# ─────────────────────────────────────────────────────────────────────

class TestLinear:

    @pytest.mark.parametrize("mode_a", MODES)
    @pytest.mark.parametrize("mode_b", MODES)
    def test_add_costs_nothing(self, mode_a, mode_b):
        env = Environment()
        a = Field.new(env, mode_a, 11)
        b = Field.new(env, mode_b, 31)
        result, n = cost(env, lambda: a.add(b))
        assert result.value == FR(42)
        assert n == 0
        assert result.mode is mode_a.combine(mode_b)

    def test_sub_neg_double(self, env):
        a = Field.new(env, Mode.PRIVATE, 5)
        b = Field.new(env, Mode.PUBLIC, 8)
        assert a.sub(b).value == FR(-3)
        assert a.neg().value == FR(CURVE_ORDER - 5)
        assert a.double().value == FR(10)
        assert env.num_constraints == 0

    def test_add_int(self, env):
        a = Field.new(env, Mode.PRIVATE, 5)
        assert a.add(2).value == FR(7)
        assert a.add(FR(2)).mode is Mode.PRIVATE

    def test_add_cancellation_is_constant(self, env):
        a = Field.new(env, Mode.PRIVATE, 5)
        assert a.sub(a).is_constant()

    def test_constants(self, env):
        assert Field.zero(env).value == FR(0)
        assert Field.one(env).value == FR(1)
        assert Field.constant(env, 9).mode is Mode.CONSTANT
        assert env.num_variables == 0

    def test_new_constant_mode(self, env):
        a = Field.new(env, Mode.CONSTANT, 9)
        assert a.is_constant()
        assert env.num_constants == 1


# ─────────────────────────────────────────────────────────────────────
# 곱셈 계열
# ─────────────────────────────────────────────────────────────────────

class TestMultiply:

    @pytest.mark.parametrize("mode_a", MODES)
    @pytest.mark.parametrize("mode_b", MODES)
    def test_mul_cost_and_mode(self, mode_a, mode_b):
        env = Environment()
        a = Field.new(env, mode_a, 6)
        b = Field.new(env, mode_b, 7)
        result, n = cost(env, lambda: a.mul(b))
        assert result.value == FR(42)
        assert result.mode is mode_a.combine(mode_b)
        assert n == (0 if mode_a.is_constant() or mode_b.is_constant() else 1)
        assert env.is_satisfied()

    def test_mul_by_constant_zero(self, env):
        a = Field.new(env, Mode.PRIVATE, 6)
        result = a.mul(0)
        assert result.is_constant()
        assert result.value == FR(0)

    def test_square(self, env):
        a = Field.new(env, Mode.PUBLIC, 9)
        result, n = cost(env, a.square)
        assert result.value == FR(81)
        assert result.mode is Mode.PUBLIC
        assert n == 1
        assert Field.constant(env, 3).square().value == FR(9)
        assert env.num_constraints == 1

    def test_foreign_operand(self, env):
        a = Field.new(env, Mode.PRIVATE, 1)
        b = Field.new(Environment("other"), Mode.PRIVATE, 1)
        with pytest.raises(ForeignReferenceError):
            a.mul(b)
        assert env.num_constraints == 0

    def test_constant_from_other_environment(self, env):
        """다른 Environment의 상수 Field는 변수가 없으므로 섞어 쓸 수 있다."""
        a = Field.new(env, Mode.PRIVATE, 6)
        k = Field.constant(Environment("other"), 7)
        result, n = cost(env, lambda: a.mul(k).add(k))
        assert result.value == FR(49)
        assert result.env is env
        assert n == 0

    def test_rejects_non_field(self, env):
        a = Field.new(env, Mode.PRIVATE, 1)
        with pytest.raises(TypeError):
            a.mul("2")


class TestInverseAndDivision:

    def test_inverse(self, env):
        a = Field.new(env, Mode.PRIVATE, 4)
        result, n = cost(env, a.inverse)
        assert result.value * FR(4) == FR(1)
        assert n == 1
        assert env.is_satisfied()

    def test_constant_zero_inverse_raises(self, env):
        with pytest.raises(ArithmeticUndefinedError):
            Field.zero(env).inverse()
        assert env.num_constraints == 0

    def test_private_zero_inverse_is_unsatisfied(self, env):
        """Private 0의 역원은 구성은 성공하고 회로가 만족 불가능해진다."""
        a = Field.new(env, Mode.PRIVATE, 0)
        result = a.inverse()
        assert result.value == FR(0)
        assert env.num_constraints == 1
        assert not env.is_satisfied()

    @pytest.mark.parametrize("method", ["div", "div_unchecked"])
    def test_division(self, env, method):
        a = Field.new(env, Mode.PRIVATE, 10)
        b = Field.new(env, Mode.PRIVATE, 4)
        result, n = cost(env, lambda: getattr(a, method)(b))
        assert result.value * FR(4) == FR(10)
        assert n == 2
        assert env.is_satisfied()

    @pytest.mark.parametrize("method", ["div", "div_unchecked"])
    def test_constant_division_by_zero_raises(self, env, method):
        with pytest.raises(ArithmeticUndefinedError):
            getattr(Field.constant(env, 3), method)(Field.zero(env))

    @pytest.mark.parametrize("method", ["div", "div_unchecked"])
    def test_private_division_by_zero_is_unsatisfied(self, env, method):
        a = Field.new(env, Mode.PRIVATE, 3)
        b = Field.new(env, Mode.PRIVATE, 0)
        getattr(a, method)(b)
        assert not env.is_satisfied()
        assert [c.scope for c in env.unsatisfied_constraints()] == [f"{method}/inverse"]

    def test_checked_and_unchecked_build_same_circuit(self):
        circuits = []
        for method in ("div", "div_unchecked"):
            env = Environment()
            a = Field.new(env, Mode.PRIVATE, 3)
            b = Field.new(env, Mode.PUBLIC, 5)
            getattr(a, method)(b)
            circuits.append([(repr(c.a), repr(c.b), repr(c.c)) for c in env.constraints])
        assert circuits[0] == circuits[1]

    def test_divide_by_constant(self, env):
        a = Field.new(env, Mode.PRIVATE, 10)
        result, n = cost(env, lambda: a.div(5))
        assert result.value == FR(2)
        assert n == 0


class TestSquareRoot:

    def test_even_root(self, env):
        a = Field.new(env, Mode.PRIVATE, 9)
        root, n = cost(env, a.square_root)
        assert root.value * root.value == FR(9)
        assert int(root.value) % 2 == 0
        assert n == 1
        assert env.is_satisfied()

    def test_constant_root(self, env):
        root = Field.constant(env, 16).square_root()
        assert root.is_constant()
        assert root.value == sqrt(FR(16))
        assert root.value * root.value == FR(16)

    def test_constant_non_residue_raises(self, env):
        with pytest.raises(ArithmeticUndefinedError):
            Field.constant(env, _first_non_residue()).square_root()

    def test_private_non_residue_is_unsatisfied(self, env):
        a = Field.new(env, Mode.PRIVATE, _first_non_residue())
        a.square_root()
        assert not env.is_satisfied()

    def test_sqrt_helper(self):
        for n in [0, 1, 4, 25, 12345 ** 2]:
            root = sqrt(FR(n))
            assert root * root == FR(n)
            assert int(root) % 2 == 0
        assert sqrt(FR(_first_non_residue())) is None


class TestPow:

    def test_constant_exponent(self, env):
        a = Field.new(env, Mode.PRIVATE, 3)
        result = a.pow(5)
        assert result.value == FR(243)
        assert env.is_satisfied()

    def test_constant_base_and_exponent(self, env):
        result, n = cost(env, lambda: Field.constant(env, 2).pow(10))
        assert result.value == FR(1024)
        assert n == 0

    def test_exponent_one_zero(self, env):
        a = Field.new(env, Mode.PRIVATE, 7)
        assert a.pow(1).value == FR(7)
        assert a.pow(0).value == FR(1)

    def test_private_exponent(self, env, operands):
        """0^1 (Private 지수): 비트 분해 후 ternary로 선택."""
        a, b = operands
        result = a.pow(b)
        assert result.value == FR(0)
        assert result.mode is Mode.PRIVATE
        assert env.is_satisfied()

    def test_private_exponent_value(self, env):
        a = Field.new(env, Mode.PUBLIC, 3)
        e = Field.new(env, Mode.PRIVATE, 4)
        assert a.pow(e).value == FR(81)
        assert env.is_satisfied()


# ─────────────────────────────────────────────────────────────────────
# 동등 비교
# ─────────────────────────────────────────────────────────────────────

class TestEquality:

    @pytest.mark.parametrize("x, y", [(0, 0), (0, 1), (5, 5), (7, 3)])
    def test_is_equal(self, env, x, y):
        a = Field.new(env, Mode.PRIVATE, x)
        b = Field.new(env, Mode.PRIVATE, y)
        result, n = cost(env, lambda: a.is_equal(b))
        assert result.value == (x == y)
        assert n == 2
        assert a.is_not_equal(b).value == (x != y)
        assert env.is_satisfied()

    def test_constant_difference_folds(self, env):
        a = Field.new(env, Mode.PRIVATE, 5)
        result, n = cost(env, lambda: a.is_equal(a.add(0)))
        assert result.is_constant() and result.value is True
        result, n2 = cost(env, lambda: a.is_equal(a.add(1)))
        assert result.value is False
        assert n == n2 == 0

    def test_mode(self, env):
        a = Field.new(env, Mode.PUBLIC, 1)
        b = Field.new(env, Mode.CONSTANT, 2)
        assert a.is_equal(b).mode is Mode.PUBLIC

    def test_constraint_shape(self, env):
        """d·w = 1 - eq,  d·eq = 0"""
        a = Field.new(env, Mode.PRIVATE, 3)
        b = Field.new(env, Mode.PRIVATE, 4)
        result = a.is_equal(b)
        first, second = env.constraints
        difference = a.lc.sub(b.lc)
        assert first.a.is_identical(difference)
        assert first.c.is_identical(result.not_().lc)
        assert second.a.is_identical(difference)
        assert second.b.is_identical(result.lc)
        assert second.c.is_constant()
        assert {c.scope for c in env.constraints} == {"is_equal"}


# ─────────────────────────────────────────────────────────────────────
# 조건 선택
# ─────────────────────────────────────────────────────────────────────

class TestTernary:

    @pytest.mark.parametrize("cond", [False, True])
    def test_select(self, env, cond):
        condition = Boolean.new(env, Mode.PRIVATE, cond)
        x = Field.new(env, Mode.PRIVATE, 10)
        y = Field.new(env, Mode.PUBLIC, 20)
        result, n = cost(env, lambda: Field.ternary(condition, x, y))
        assert result.value == (FR(10) if cond else FR(20))
        assert result.mode is Mode.PRIVATE
        assert n == 1
        assert env.is_satisfied()

    def test_identical_branches(self, env):
        condition = Boolean.new(env, Mode.PRIVATE, True)
        x = Field.new(env, Mode.PRIVATE, 10)
        result, n = cost(env, lambda: Field.ternary(condition, x, x))
        assert result is x
        assert n == 0

    def test_constant_branches_fold_linearly(self, env):
        condition = Boolean.new(env, Mode.PRIVATE, True)
        result, n = cost(env, lambda: Field.ternary(condition, Field.constant(env, 7), Field.constant(env, 3)))
        assert result.value == FR(7)
        assert n == 0

    def test_type_checks(self, env):
        x = Field.new(env, Mode.PRIVATE, 10)
        with pytest.raises(TypeError):
            Field.ternary(True, x, x)
        with pytest.raises(TypeError):
            Field.ternary(Boolean.constant(env, True), x, 3)

    def test_constant_branch_from_other_environment(self, env):
        condition = Boolean.new(env, Mode.PRIVATE, False)
        x = Field.new(env, Mode.PRIVATE, 1)
        y = Field.constant(Environment("other"), 5)
        result = Field.ternary(condition, x, y)
        assert result.value == FR(5)
        assert result.env is env
        assert env.is_satisfied()

    def test_foreign_branch(self, env):
        condition = Boolean.new(env, Mode.PRIVATE, True)
        x = Field.new(env, Mode.PRIVATE, 1)
        y = Field.new(Environment("other"), Mode.PRIVATE, 1)
        with pytest.raises(ForeignReferenceError):
            Field.ternary(condition, x, y)
