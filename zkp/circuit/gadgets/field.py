"""
Field 가젯
===========

FR 원소 연산을 최소 제약 회로로 구성하는 연산 라이브러리.
각 연산은 (a) 위트니스 값을 계산하고, (b) 필요한 곱셈 제약만 등록하며,
(c) 결과의 모드를 전파한다.

**모든 연산의 첫 단계**: 피연산자가 모두 상수이면 평문으로 계산하고
제약 0개로 상수를 반환한다.

**제약 비용 (상수가 아닌 경우)**:
  | 연산                    | 비용              |
  |-------------------------|-------------------|
  | add/sub/neg/double      | 0                 |
  | square                  | 1                 |
  | mul                     | 1 (한쪽이 상수면 0) |
  | inverse                 | 1                 |
  | div / div_unchecked     | inverse + 1       |
  | square_root             | 1                 |
  | is_equal / is_not_equal | 2                 |
  | ternary                 | 1                 |
  | from_bits_le            | 0 (용량 이내)      |
  | to_bits_le              | 254 + 1 + 범위검사 |
  | is_less_than 등         | O(비트 수)         |
  | pow                     | O(비트 수)         |

**지연된 불만족 (deferred unsatisfiability)**:
  상수 0의 역원, 상수 비잉여의 제곱근은 즉시 ArithmeticUndefinedError.
  같은 상황이 Public/Private 피연산자에서 생기면 구성은 성공하고,
  해당 위트니스에 대해 만족 불가능한 제약이 남는다.

사용 예시:
    >>> env = Environment()
    >>> a = Field.new(env, Mode.PRIVATE, 3)
    >>> b = Field.new(env, Mode.PRIVATE, 4)
    >>> c = a.mul(b).add(Field.constant(env, 1))   # 13, 제약 1개
    >>> env.is_satisfied()
"""

from zkp.circuit.errors import ArithmeticUndefinedError, BitRangeError, ForeignReferenceError
from zkp.circuit.field import (
    CAPACITY,
    CURVE_ORDER,
    FIELD_SIZE_IN_BITS,
    FR,
    sqrt,
    to_bits_le,
    to_fr,
)
from zkp.circuit.gadgets.boolean import (
    Boolean,
    assert_bits_are_zero,
    is_less_than_or_equal_constant,
)
from zkp.circuit.linear_combination import LinearCombination
from zkp.circuit.mode import Mode


class Field:
    """FR 원소를 나타내는 회로 값 (LC 하나를 감싼다)."""

    def __init__(self, env, lc):
        self.env = env
        self.lc = lc

    # ─────────────────────────────────────────────────────────────────
    # 생성
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def new(cls, env, mode, value):
        """모드와 값으로 Field를 만든다. 상수 모드는 변수 없이 상수항이 된다."""
        variable = env.new_variable(mode, to_fr(value))
        return cls(env, LinearCombination.from_variable(variable))

    @classmethod
    def constant(cls, env, value):
        return cls(env, LinearCombination(to_fr(value)))

    @classmethod
    def zero(cls, env):
        return cls.constant(env, 0)

    @classmethod
    def one(cls, env):
        return cls.constant(env, 1)

    # ─────────────────────────────────────────────────────────────────
    # 조회
    # ─────────────────────────────────────────────────────────────────

    @property
    def mode(self):
        return self.lc.mode

    def is_constant(self):
        return self.lc.is_constant()

    @property
    def value(self):
        """위트니스 값 (FR)."""
        return self.lc.value

    def _coerce(self, other):
        """피연산자를 같은 Environment의 Field로 맞춘다.

        다른 Environment의 상수 Field는 변수가 없으므로 값만 가져온다.
        변수를 가진 Field만 ForeignReferenceError.
        """
        if isinstance(other, Field):
            if other.env is not self.env:
                return _adopt(self.env, other)
            return other
        if isinstance(other, (int, FR)):
            return Field.constant(self.env, other)
        raise TypeError(f"Field와 연산할 수 없는 값: {other!r}")

    def _witness(self, mode, value):
        variable = self.env.new_variable(mode, value)
        return LinearCombination.from_variable(variable)

    # ─────────────────────────────────────────────────────────────────
    # 선형 연산 (제약 없음)
    # ─────────────────────────────────────────────────────────────────

    def add(self, other):
        other = self._coerce(other)
        return Field(self.env, self.lc.add(other.lc))

    def sub(self, other):
        other = self._coerce(other)
        return Field(self.env, self.lc.sub(other.lc))

    def neg(self):
        return Field(self.env, self.lc.neg())

    def double(self):
        return Field(self.env, self.lc.scale(2))

    # ─────────────────────────────────────────────────────────────────
    # 곱셈 계열
    # ─────────────────────────────────────────────────────────────────

    def mul(self, other):
        """곱셈. 한쪽이 상수면 스칼라곱(제약 0), 아니면 a·b = r (제약 1)."""
        other = self._coerce(other)
        if self.is_constant() and other.is_constant():
            return Field.constant(self.env, self.value * other.value)
        if self.is_constant():
            return Field(self.env, other.lc.scale(self.lc.constant))
        if other.is_constant():
            return Field(self.env, self.lc.scale(other.lc.constant))

        product = self._witness(self.mode.combine(other.mode), self.value * other.value)
        self.env.enforce(self.lc, other.lc, product)
        return Field(self.env, product)

    def square(self):
        """제곱: a·a = r (제약 1)."""
        if self.is_constant():
            return Field.constant(self.env, self.value * self.value)

        square = self._witness(self.mode, self.value * self.value)
        self.env.enforce(self.lc, self.lc, square)
        return Field(self.env, square)

    def inverse(self):
        """곱셈 역원: a·w = 1 (제약 1).

        Raises:
            ArithmeticUndefinedError: 상수 0의 역원
        """
        if self.is_constant():
            if self.value == FR(0):
                raise ArithmeticUndefinedError("상수 0의 역원은 존재하지 않습니다")
            return Field.constant(self.env, FR(1) / self.value)

        # 위트니스가 0이면 역원 대신 0을 넣는다: a·w = 1 이 성립하지 않게 된다
        value = self.value
        inverse = FR(0) if value == FR(0) else FR(1) / value
        with self.env.scope("inverse"):
            witness = self._witness(self.mode, inverse)
            self.env.enforce(self.lc, witness, LinearCombination.one())
        return Field(self.env, witness)

    def div(self, other):
        """나눗셈 a / b = a · b⁻¹.

        b ≠ 0 은 inverse의 제약 a·w = 1 로만 보장된다.
        Private 제수가 0이면 구성은 성공하고 위트니스 검사에서 불만족으로 드러난다.

        Raises:
            ArithmeticUndefinedError: 상수 0으로 나눔
        """
        other = self._coerce(other)
        if self.is_constant() and other.is_constant():
            if other.value == FR(0):
                raise ArithmeticUndefinedError("상수 0으로 나눌 수 없습니다")
            return Field.constant(self.env, self.value / other.value)
        with self.env.scope("div"):
            return self.mul(other.inverse())

    def div_unchecked(self, other):
        """나눗셈 (비검사). div와 같은 회로를 만든다.

        호출자가 제수의 위트니스가 0이 아님을 보장해야 한다.
        """
        other = self._coerce(other)
        if self.is_constant() and other.is_constant():
            if other.value == FR(0):
                raise ArithmeticUndefinedError("상수 0으로 나눌 수 없습니다")
            return Field.constant(self.env, self.value / other.value)
        with self.env.scope("div_unchecked"):
            return self.mul(other.inverse())

    def pow(self, exponent):
        """거듭제곱 self^exponent (square-and-multiply).

        지수의 비트를 최상위부터 순회한다:
          acc = acc²                        (제약 1)
          bit가 상수:  참이면 acc = acc·base
          bit가 변수:  acc = ternary(bit, acc·base, acc)  (제약 2)

        Args:
            exponent: Field 또는 정수
        """
        exponent = self._coerce(exponent)
        if self.is_constant() and exponent.is_constant():
            return Field.constant(self.env, self.value ** int(exponent.value))

        with self.env.scope("pow"):
            output = Field.one(self.env)
            for bit in exponent.to_bits_be():
                output = output.square()
                if bit.is_constant():
                    if bit.value:
                        output = output.mul(self)
                else:
                    output = Field.ternary(bit, output.mul(self), output)
        return output

    def square_root(self):
        """제곱근 r (r·r = a, 제약 1). 짝수 표현의 근을 고른다.

        Raises:
            ArithmeticUndefinedError: 상수 비잉여
        """
        root = sqrt(self.value)
        if self.is_constant():
            if root is None:
                raise ArithmeticUndefinedError(
                    f"{int(self.value)}은(는) 이차 잉여가 아니므로 제곱근이 없습니다"
                )
            return Field.constant(self.env, root)

        # 비잉여 위트니스는 0을 넣어 r·r = a 가 성립하지 않게 한다
        with self.env.scope("square_root"):
            witness = self._witness(self.mode, FR(0) if root is None else root)
            self.env.enforce(witness, witness, self.lc)
        return Field(self.env, witness)

    # ─────────────────────────────────────────────────────────────────
    # 동등 비교
    # ─────────────────────────────────────────────────────────────────

    def is_equal(self, other):
        """a == b 인지. 제로 테스트 (제약 2).

        d = a - b 에 대해 위트니스 eq, w를 할당하고
            d · w  = 1 - eq
            d · eq = 0
        을 등록한다. d ≠ 0 이면 eq = 0 (w = d⁻¹), d = 0 이면 eq = 1.
        두 제약이 eq ∈ {0, 1}을 함께 보장하므로 Boolean 제약은 따로 없다.
        """
        other = self._coerce(other)
        difference = self.lc.sub(other.lc)
        if difference.is_constant():
            return Boolean.constant(self.env, difference.constant == FR(0))

        mode = self.mode.combine(other.mode)
        d = difference.value
        with self.env.scope("is_equal"):
            is_eq = self._witness(mode, FR(1) if d == FR(0) else FR(0))
            helper = self._witness(mode, FR(1) if d == FR(0) else FR(1) / d)
            self.env.enforce(difference, helper, LinearCombination.one().sub(is_eq))
            self.env.enforce(difference, is_eq, LinearCombination.zero())
        return Boolean(self.env, is_eq)

    def is_not_equal(self, other):
        return self.is_equal(other).not_()

    # ─────────────────────────────────────────────────────────────────
    # 조건 선택
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def ternary(condition, first, second):
        """condition ? first : second  =  second + condition·(first - second).

        condition이 상수이거나, first/second가 같은 LC이거나,
        first - second가 상수이면 제약 없이 접힌다. 그 외 제약 1.
        """
        if not isinstance(condition, Boolean):
            raise TypeError(f"조건은 Boolean이어야 합니다: {condition!r}")
        env = condition.env
        if not isinstance(first, Field) or not isinstance(second, Field):
            raise TypeError("ternary의 두 분기는 Field여야 합니다")
        first, second = _adopt(env, first), _adopt(env, second)

        if condition.is_constant():
            return first if condition.value else second
        if first.lc.is_identical(second.lc):
            return first

        difference = first.lc.sub(second.lc)
        if difference.is_constant():
            return Field(env, second.lc.add(condition.lc.scale(difference.constant)))

        mode = Mode.combine_all([condition.mode, first.mode, second.mode])
        chosen = first.value if condition.value else second.value
        variable = env.new_variable(mode, chosen)
        output = LinearCombination.from_variable(variable)
        env.enforce(condition.lc, difference, output.sub(second.lc))
        return Field(env, output)

    # ─────────────────────────────────────────────────────────────────
    # 비트 분해 / 재구성
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def from_bits_le(cls, bits):
        """리틀 엔디언 Boolean 리스트 → Field.  value = Σ bit_i · 2^i.

        비트 수에 따른 처리:
          - CAPACITY(253) 이하: 선형 결합만 (제약 0)
          - FIELD_SIZE_IN_BITS(254): p - 1 이하 범위 검사 추가
              (상수 상위 비트만으로 결과가 정해지면 검사 회로 없이 처리)
          - 그보다 김: 초과 비트는 0이어야 한다.
              상수 1인 초과 비트  → 즉시 BitRangeError
              변수 초과 비트      → Σ 초과 비트 = 0 제약 1개

        오류는 모두 제약을 등록하기 전에 발생한다.

        Raises:
            BitRangeError: 상수 비트가 필드 범위를 넘는 값을 표현할 때
        """
        if not bits:
            raise ValueError("비트 리스트가 비어 있습니다")
        for bit in bits:
            if not isinstance(bit, Boolean):
                raise TypeError(f"Boolean이 아닙니다: {bit!r}")
        env = bits[0].env
        for bit in bits:
            if bit.env is not env:
                raise ForeignReferenceError("다른 Environment의 비트가 섞여 있습니다")

        body, excess = bits[:FIELD_SIZE_IN_BITS], bits[FIELD_SIZE_IN_BITS:]

        # 등록 전에 상수로 알 수 있는 오류를 먼저 검사한다
        for i, bit in enumerate(excess):
            if bit.is_constant() and bit.value:
                raise BitRangeError(
                    f"{FIELD_SIZE_IN_BITS + i}번째 비트가 1입니다: 필드 크기({FIELD_SIZE_IN_BITS}비트)를 넘습니다"
                )
        needs_range_check = len(body) > CAPACITY and not _constant_prefix_in_range(body)

        with env.scope("from_bits_le"):
            variable_excess = [bit for bit in excess if not bit.is_constant()]
            if variable_excess:
                assert_bits_are_zero(env, variable_excess)
            if needs_range_check:
                env.assert_true(is_less_than_or_equal_constant(body, CURVE_ORDER - 1))

        lc = LinearCombination.zero()
        coefficient = FR(1)
        for bit in body:
            lc = lc.add(bit.lc.scale(coefficient))
            coefficient = coefficient + coefficient
        return cls(env, lc)

    @classmethod
    def from_bits_be(cls, bits):
        return cls.from_bits_le(list(reversed(bits)))

    def to_bits_le(self):
        """Field → FIELD_SIZE_IN_BITS개의 리틀 엔디언 Boolean.

        상수가 아니면 비트마다 Boolean을 할당하고(제약 1씩),
        재구성 값이 원래 값과 같음을 assert_eq로 강제한다(제약 1).
        재구성은 254비트이므로 p - 1 이하 범위 검사가 함께 붙는다.
        """
        if self.is_constant():
            return [Boolean.constant(self.env, bit) for bit in to_bits_le(self.value)]

        with self.env.scope("to_bits_le"):
            bits = [Boolean.new(self.env, self.mode, bit) for bit in to_bits_le(self.value)]
            self.env.assert_eq(Field.from_bits_le(bits).lc, self.lc)
        return bits

    def to_bits_be(self):
        return list(reversed(self.to_bits_le()))

    # ─────────────────────────────────────────────────────────────────
    # 순서 비교
    # ─────────────────────────────────────────────────────────────────

    def is_less_than(self, other):
        """self < other (정수 표현 기준).

        두 값을 리틀 엔디언 비트로 분해한 뒤 하위 비트부터 누적한다:
            lt = ternary(a_i == b_i, lt, b_i)
        비트가 다르면 b_i = 1 일 때만 a < b 이다. 최상위 비트가
        마지막에 적용되므로 사전식(lexicographic) 비교와 같다.

        최상위 비트부터 AND/OR로 내려가는 방식과 결과는 같다.
        여기서는 비트마다 xor 1 + ternary 1 로 비용이 고정되고,
        상수 피연산자의 비트는 두 가젯의 접힘 규칙으로 제약 없이 처리된다.
        """
        other = self._coerce(other)
        if self.is_constant() and other.is_constant():
            return Boolean.constant(self.env, int(self.value) < int(other.value))

        with self.env.scope("is_less_than"):
            self_bits = self.to_bits_le()
            other_bits = other.to_bits_le()
            is_less = Boolean.constant(self.env, False)
            for self_bit, other_bit in zip(self_bits, other_bits):
                is_less = Boolean.ternary(self_bit.is_equal(other_bit), is_less, other_bit)
        return is_less

    def is_greater_than(self, other):
        return self._coerce(other).is_less_than(self)

    def is_less_than_or_equal(self, other):
        return self.is_greater_than(other).not_()

    def is_greater_than_or_equal(self, other):
        return self.is_less_than(other).not_()

    def __repr__(self):
        return f"Field({self.mode.label}, {int(self.value)})"


def _adopt(env, field):
    """field를 env 소속으로 맞춘다. 다른 Environment의 상수는 값만 옮긴다."""
    if field.env is env:
        return field
    if field.is_constant():
        return Field.constant(env, field.value)
    raise ForeignReferenceError("다른 Environment의 Field와 연산할 수 없습니다")


def _constant_prefix_in_range(body):
    """254비트 body의 상수 상위 비트만으로 p - 1 이하 여부가 정해지는지.

    최상위 비트부터 p - 1의 비트와 비교하며, 처음으로 다른 상수 비트나
    변수 비트에서 멈춘다:
      - 상수 0 (p - 1은 1): 범위 안이 확정 → True
      - 상수 1 (p - 1은 0): 범위 밖이 확정 → BitRangeError
      - 변수 비트: 회로로 검사해야 함 → False
    모든 비트가 p - 1과 같으면 True.

    Raises:
        BitRangeError: 상수 상위 비트가 p 이상의 값을 표현할 때
    """
    bound_bits = to_bits_le(CURVE_ORDER - 1, len(body))
    for position in reversed(range(len(body))):
        bit = body[position]
        if not bit.is_constant():
            return False
        if bit.value != bound_bits[position]:
            if bit.value:
                raise BitRangeError(
                    f"상수 상위 비트가 필드 모듈러스 이상의 값을 표현합니다 ({position}번째 비트)"
                )
            return True
    return True
