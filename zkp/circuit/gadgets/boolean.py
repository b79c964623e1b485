"""
Boolean 가젯
=============

{0, 1}로 제약된 선형 결합. 비교 가젯과 비트 분해 가젯이 사용한다.

**할당 제약**:
    b · (1 - b) = 0     (상수이면 제약 없음)

**연산별 제약 비용**:
  | 연산      | 비용 | 제약                        |
  |-----------|------|-----------------------------|
  | not_      |  0   | 1 - b (선형)                |
  | and_      |  1   | a · b = c                   |
  | or_       |  1   | not(and(not a, not b))      |
  | xor       |  1   | (2a) · b = a + b - c        |
  | is_equal  |  1   | not(xor)                    |
  | ternary   |  1   | cond · (a - b) = r - b      |

  피연산자가 상수이거나, 같은 LC이거나, 서로의 보수이면 제약 없이 접힌다.

**상수와의 비교 (is-at-most)**:
  리틀 엔디언 비트 b와 상수 k에 대해 "b > k"를 하위 비트부터 누적한다:
    k_i = 1 이면  gt = b_i AND gt
    k_i = 0 이면  gt = b_i OR  gt
  b ≤ k 는 NOT gt. 최상위 비트가 마지막에 결정된다.
"""

from zkp.circuit.errors import ForeignReferenceError
from zkp.circuit.field import FR, to_bits_le
from zkp.circuit.linear_combination import LinearCombination
from zkp.circuit.mode import Mode


class Boolean:
    """{0, 1} 값을 가지는 회로 값."""

    def __init__(self, env, lc):
        self.env = env
        self.lc = lc

    # ─── 생성 ───

    @classmethod
    def new(cls, env, mode, value):
        """Boolean 변수를 할당한다. 상수가 아니면 b·(1-b)=0 제약 1개."""
        variable = env.new_variable(mode, FR(1 if value else 0))
        lc = LinearCombination.from_variable(variable)
        if not mode.is_constant():
            env.enforce(lc, LinearCombination.one().sub(lc), LinearCombination.zero())
        return cls(env, lc)

    @classmethod
    def constant(cls, env, value):
        return cls(env, LinearCombination(FR(1 if value else 0)))

    # ─── 조회 ───

    @property
    def mode(self):
        return self.lc.mode

    def is_constant(self):
        return self.lc.is_constant()

    @property
    def value(self):
        return self.lc.value == FR(1)

    def _check(self, other):
        if not isinstance(other, Boolean):
            raise TypeError(f"Boolean이 아닙니다: {other!r}")
        if other.env is not self.env:
            # 상수는 변수가 없으므로 값만 가져온다
            if other.is_constant():
                return Boolean.constant(self.env, other.value)
            raise ForeignReferenceError("다른 Environment의 Boolean과 연산할 수 없습니다")
        return other

    def _is_complement_of(self, other):
        return self.lc.add(other.lc).is_identical(LinearCombination.one())

    def _witness(self, mode, value):
        variable = self.env.new_variable(mode, FR(1 if value else 0))
        return LinearCombination.from_variable(variable)

    # ─── 연산 ───

    def not_(self):
        return Boolean(self.env, LinearCombination.one().sub(self.lc))

    def and_(self, other):
        other = self._check(other)
        if self.is_constant():
            return other if self.value else self
        if other.is_constant():
            return self if other.value else other
        if self.lc.is_identical(other.lc):
            return self
        if self._is_complement_of(other):
            return Boolean.constant(self.env, False)

        output = self._witness(self.mode.combine(other.mode), self.value and other.value)
        self.env.enforce(self.lc, other.lc, output)
        return Boolean(self.env, output)

    def or_(self, other):
        other = self._check(other)
        return self.not_().and_(other.not_()).not_()

    def nand(self, other):
        return self.and_(other).not_()

    def nor(self, other):
        return self.or_(other).not_()

    def xor(self, other):
        other = self._check(other)
        if self.is_constant():
            return other.not_() if self.value else other
        if other.is_constant():
            return self.not_() if other.value else self
        if self.lc.is_identical(other.lc):
            return Boolean.constant(self.env, False)
        if self._is_complement_of(other):
            return Boolean.constant(self.env, True)

        output = self._witness(self.mode.combine(other.mode), self.value != other.value)
        self.env.enforce(self.lc.scale(2), other.lc, self.lc.add(other.lc).sub(output))
        return Boolean(self.env, output)

    def is_equal(self, other):
        return self.xor(other).not_()

    def is_not_equal(self, other):
        return self.xor(other)

    @staticmethod
    def ternary(condition, first, second):
        """condition이 참이면 first, 거짓이면 second."""
        first = condition._check(first)
        second = condition._check(second)
        if condition.is_constant():
            return first if condition.value else second
        if first.lc.is_identical(second.lc):
            return first

        env = condition.env
        difference = first.lc.sub(second.lc)
        if difference.is_constant():
            return Boolean(env, second.lc.add(condition.lc.scale(difference.constant)))

        mode = Mode.combine_all([condition.mode, first.mode, second.mode])
        chosen = first.value if condition.value else second.value
        output = condition._witness(mode, chosen)
        env.enforce(condition.lc, difference, output.sub(second.lc))
        return Boolean(env, output)

    def __repr__(self):
        return f"Boolean({self.mode.label}, {self.value})"


# ─────────────────────────────────────────────────────────────────────
# 비트 시퀀스 헬퍼
# ─────────────────────────────────────────────────────────────────────

def assert_bits_are_zero(env, bits):
    """모든 비트가 0임을 강제한다.

    비트는 이미 {0, 1}로 제약되어 있으므로 Σ b_i = 0 하나로 충분하다.
    상수 비트만 있으면 제약 없이 즉시 확인한다.
    """
    total = LinearCombination.zero()
    for bit in bits:
        total = total.add(bit.lc)
    return env.enforce(total, LinearCombination.one(), LinearCombination.zero())


def is_less_than_or_equal_constant(bits_le, bound):
    """리틀 엔디언 비트가 나타내는 정수가 상수 bound 이하인지.

    Args:
        bits_le: Boolean 리스트 (비어 있지 않아야 함)
        bound: 정수 (bits_le 길이로 표현 가능해야 함)

    Returns:
        Boolean
    """
    if not bits_le:
        raise ValueError("비트 리스트가 비어 있습니다")
    if bound < 0 or bound.bit_length() > len(bits_le):
        raise ValueError(f"{len(bits_le)}비트로 표현할 수 없는 상한: {bound}")

    env = bits_le[0].env
    is_greater = Boolean.constant(env, False)
    for bound_bit, bit in zip(to_bits_le(bound, len(bits_le)), bits_le):
        if bound_bit:
            is_greater = bit.and_(is_greater)
        else:
            is_greater = bit.or_(is_greater)
    return is_greater.not_()


def assert_less_than_or_equal_constant(bits_le, bound):
    """리틀 엔디언 비트가 나타내는 정수 ≤ bound 를 강제한다."""
    is_lte = is_less_than_or_equal_constant(bits_le, bound)
    return bits_le[0].env.assert_true(is_lte)
