"""
선형 결합 (Linear Combination)
===============================

모든 가젯이 다루는 기본 대수 객체:

    lc = constant + Σ coeff_i · var_i

**규칙**:
  - 계수가 0인 항은 저장하지 않는다.
  - CONSTANT 변수는 항이 아니라 상수항으로 접힌다.
  - 항 순서는 삽입 순서를 따른다 (내보내기 결과가 안정적).
  - 서로 다른 Environment의 변수를 섞으면 ForeignReferenceError.

**모드 유도**:
  항이 없으면 CONSTANT, PRIVATE 항이 하나라도 있으면 PRIVATE,
  그 외에는 PUBLIC.

덧셈/뺄셈/부호반전/스칼라곱은 제약을 만들지 않는다.
"""

from zkp.circuit.errors import ForeignReferenceError
from zkp.circuit.field import FR, to_fr
from zkp.circuit.mode import Mode
from zkp.circuit.variable import Variable


class LinearCombination:
    """변수 → 계수 순서 사전과 상수항."""

    def __init__(self, constant=0, terms=None):
        self.constant = to_fr(constant)
        self.terms = {}
        self._env = None
        for variable, coefficient in (terms or {}).items():
            self._add_term(variable, to_fr(coefficient))

    @classmethod
    def zero(cls):
        return cls(FR(0))

    @classmethod
    def one(cls):
        return cls(FR(1))

    @classmethod
    def from_variable(cls, variable):
        if variable.is_constant():
            return cls(variable.value)
        return cls(FR(0), {variable: FR(1)})

    @classmethod
    def convert(cls, value):
        """LC, Variable, int/FR, 또는 .lc 속성을 가진 가젯 값을 LC로 변환한다."""
        if isinstance(value, LinearCombination):
            return value
        if isinstance(value, Variable):
            return cls.from_variable(value)
        if hasattr(value, "lc"):
            return value.lc
        return cls(to_fr(value))

    # ─── 조회 ───

    @property
    def env(self):
        """항이 속한 Environment. 상수 LC이면 None."""
        return self._env

    def is_constant(self):
        return not self.terms

    @property
    def mode(self):
        if self.is_constant():
            return Mode.CONSTANT
        if any(variable.mode.is_private() for variable in self.terms):
            return Mode.PRIVATE
        return Mode.PUBLIC

    @property
    def value(self):
        """위트니스 값: constant + Σ coeff · value."""
        total = self.constant
        for variable, coefficient in self.terms.items():
            total = total + coefficient * variable.value
        return total

    def is_identical(self, other):
        """항(변수와 계수)과 상수항이 모두 같은지. 항 순서는 무관하다."""
        if self.constant != other.constant or len(self.terms) != len(other.terms):
            return False
        for variable, coefficient in self.terms.items():
            if variable not in other.terms or other.terms[variable] != coefficient:
                return False
        return True

    def num_nonzeros(self):
        """0이 아닌 항의 수 (상수항 포함)."""
        return len(self.terms) + (0 if self.constant == FR(0) else 1)

    # ─── 연산 (제약 없음) ───

    def _add_term(self, variable, coefficient):
        if variable.is_constant():
            self.constant = self.constant + coefficient * variable.value
            return
        if self._env is None:
            self._env = variable.env
        elif variable.env is not self._env:
            raise ForeignReferenceError(
                f"{variable.name} 변수가 다른 Environment에 속합니다"
            )
        updated = self.terms.get(variable, FR(0)) + coefficient
        if updated == FR(0):
            self.terms.pop(variable, None)
        else:
            self.terms[variable] = updated

    def _copy(self):
        result = LinearCombination(self.constant)
        result.terms = dict(self.terms)
        result._env = self._env
        return result

    def add(self, other):
        other = LinearCombination.convert(other)
        result = self._copy()
        result.constant = result.constant + other.constant
        for variable, coefficient in other.terms.items():
            result._add_term(variable, coefficient)
        return result

    def neg(self):
        result = LinearCombination(-self.constant)
        result._env = self._env
        result.terms = {v: -c for v, c in self.terms.items()}
        return result

    def sub(self, other):
        return self.add(LinearCombination.convert(other).neg())

    def scale(self, coefficient):
        """스칼라 곱. 0을 곱하면 상수 0 LC가 된다."""
        coefficient = to_fr(coefficient)
        if coefficient == FR(0):
            return LinearCombination.zero()
        result = LinearCombination(self.constant * coefficient)
        result._env = self._env
        result.terms = {v: c * coefficient for v, c in self.terms.items()}
        return result

    __add__ = add
    __sub__ = sub
    __neg__ = neg

    def __radd__(self, other):
        return LinearCombination.convert(other).add(self)

    def __rsub__(self, other):
        return LinearCombination.convert(other).sub(self)

    def __mul__(self, coefficient):
        return self.scale(coefficient)

    __rmul__ = __mul__

    def __repr__(self):
        parts = [str(int(self.constant))]
        for variable, coefficient in self.terms.items():
            parts.append(f"{int(coefficient)}·{variable.name}")
        return " + ".join(parts)
