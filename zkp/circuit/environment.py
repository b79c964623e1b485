"""
제약 환경 (Constraint Environment)
===================================

하나의 회로 빌드에 필요한 모든 상태(변수, 제약)를 소유하는 명시적 컨텍스트.
전역 회로 상태가 없으므로 한 프로세스에서 독립적인 회로를 여러 개 만들 수 있다.

**수명 주기**:
  1. Environment() 생성. 회로 빌드마다 새로 만든다.
  2. 가젯들이 new_variable / enforce로 변수와 제약을 "추가만" 한다.
     (삭제/되돌리기 연산은 없다)
  3. freeze() 후 내보내기(export)나 증명 백엔드에 읽기 전용으로 넘긴다.

**상수 제약 처리**:
  A, B, C가 모두 상수이면 제약을 등록하지 않고 즉시 A·B == C 를 확인한다.
  거짓이면 ConstantConstraintError. 상수만의 계산은 제약 비용이 0이다.

**스코프(provenance)**:
  `with env.scope("inverse"):` 블록 안에서 등록된 제약은
  스코프 경로를 기록하므로, 만족되지 않는 제약이 어느 가젯에서
  왔는지 unsatisfied_constraints()로 확인할 수 있다.

사용 예시:
    >>> env = Environment()
    >>> x = env.new_variable(Mode.PRIVATE, FR(3))
    >>> y = env.new_variable(Mode.PRIVATE, FR(9))
    >>> env.enforce(x, x, y)      # x · x = y
    >>> env.is_satisfied()        # True
"""

import logging
from collections import namedtuple
from contextlib import contextmanager

from zkp.circuit.constraint import Constraint
from zkp.circuit.errors import (
    ConstantConstraintError,
    EnvironmentFrozenError,
    ForeignReferenceError,
)
from zkp.circuit.field import to_fr
from zkp.circuit.linear_combination import LinearCombination
from zkp.circuit.mode import Mode
from zkp.circuit.variable import Variable

logger = logging.getLogger(__name__)


class Count(namedtuple("Count", ["constants", "public", "private", "constraints"])):
    """변수/제약 수 스냅샷. 두 스냅샷의 차이로 가젯 비용을 잰다.

    예시:
        >>> before = env.count()
        >>> a.mul(b)
        >>> env.count() - before      # Count(constants=0, public=0, private=1, constraints=1)
    """

    def __sub__(self, other):
        return Count(*(x - y for x, y in zip(self, other)))


class Environment:
    """하나의 회로 빌드를 위한 변수·제약 저장소.

    속성:
        name: 회로 이름 (내보내기용)
        variables: 할당 순서대로의 Variable 리스트
        constraints: 등록 순서대로의 Constraint 리스트
    """

    def __init__(self, name="circuit"):
        self.name = name
        self.variables = []
        self.constraints = []
        self._scopes = []
        self._frozen = False
        self._next_index = {mode: 0 for mode in Mode}

    # ─── 할당 ───

    def new_variable(self, mode, value):
        """변수를 할당한다.

        Args:
            mode: Mode
            value: 위트니스 값 (정수 또는 FR)

        Returns:
            Variable
        """
        self._check_mutable()
        if not isinstance(mode, Mode):
            raise TypeError(f"Mode가 아닙니다: {mode!r}")
        index = self._next_index[mode]
        self._next_index[mode] += 1
        variable = Variable(self, mode, index, to_fr(value))
        self.variables.append(variable)
        return variable

    # ─── 제약 등록 ───

    def enforce(self, a, b, c):
        """제약 A·B = C 를 등록한다.

        Args:
            a, b, c: LinearCombination, Variable, 정수/FR, 또는 가젯 값

        Returns:
            Constraint: 등록된 제약. 세 항이 모두 상수이면 None.

        Raises:
            ForeignReferenceError: 다른 Environment의 변수가 포함됨
            ConstantConstraintError: 상수 제약이 성립하지 않음
        """
        self._check_mutable()
        a, b, c = (LinearCombination.convert(x) for x in (a, b, c))
        for lc in (a, b, c):
            if lc.env is not None and lc.env is not self:
                raise ForeignReferenceError(
                    f"'{self.name}' 회로에 다른 Environment의 선형 결합을 등록할 수 없습니다"
                )

        if a.is_constant() and b.is_constant() and c.is_constant():
            if a.constant * b.constant != c.constant:
                raise ConstantConstraintError(
                    f"상수 제약이 성립하지 않습니다: {int(a.constant)} * {int(b.constant)} != {int(c.constant)}"
                )
            return None

        constraint = Constraint(len(self.constraints), a, b, c, "/".join(self._scopes))
        self.constraints.append(constraint)
        logger.debug("%s: %r", self.name, constraint)
        return constraint

    def assert_true(self, boolean):
        """Boolean 값이 참임을 강제한다: b · 1 = 1."""
        return self.enforce(boolean, LinearCombination.one(), LinearCombination.one())

    def assert_eq(self, a, b):
        """두 값이 같음을 강제한다: (a - b) · 1 = 0."""
        difference = LinearCombination.convert(a).sub(LinearCombination.convert(b))
        return self.enforce(difference, LinearCombination.one(), LinearCombination.zero())

    @contextmanager
    def scope(self, name):
        """이름 붙은 구성 구간. 안에서 등록된 제약에 경로가 기록된다."""
        self._scopes.append(name)
        try:
            yield self
        finally:
            self._scopes.pop()

    # ─── 수명 주기 ───

    def freeze(self):
        """구성을 마치고 읽기 전용으로 만든다."""
        if not self._frozen:
            self._frozen = True
            logger.info("회로 '%s' 고정: %s", self.name, self.count())
        return self

    @property
    def is_frozen(self):
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise EnvironmentFrozenError(f"'{self.name}' 회로는 이미 고정되었습니다")

    # ─── 개수 (필요할 때 계산) ───

    def _num_of(self, mode):
        return sum(1 for v in self.variables if v.mode is mode)

    @property
    def num_constants(self):
        return self._num_of(Mode.CONSTANT)

    @property
    def num_public(self):
        return self._num_of(Mode.PUBLIC)

    @property
    def num_private(self):
        return self._num_of(Mode.PRIVATE)

    @property
    def num_variables(self):
        return len(self.variables)

    @property
    def num_constraints(self):
        return len(self.constraints)

    @property
    def num_nonzeros(self):
        """A, B, C 각각의 0이 아닌 항 수 합계."""
        totals = [0, 0, 0]
        for constraint in self.constraints:
            for i, n in enumerate(constraint.num_nonzeros()):
                totals[i] += n
        return tuple(totals)

    def count(self):
        return Count(self.num_constants, self.num_public, self.num_private, self.num_constraints)

    # ─── 만족 여부 ───

    def is_satisfied(self):
        """모든 제약에 위트니스를 대입해 A·B == C 인지 확인한다."""
        return all(constraint.is_satisfied() for constraint in self.constraints)

    def unsatisfied_constraints(self):
        """만족되지 않는 제약 리스트 (스코프 경로 포함)."""
        return [c for c in self.constraints if not c.is_satisfied()]

    def __repr__(self):
        return f"Environment({self.name!r}, {self.count()})"
