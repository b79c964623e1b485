"""
R1CS 필드 가젯: 제약 합성 엔진
================================

필드 원소 계산을 랭크-1 제약 시스템(R1CS) A·B = C 로 컴파일한다.

구성 요소 (아래에서 위로):
  - field:              bn128 스칼라 필드 FR, 제곱근, 비트 유틸리티
  - mode:               CONSTANT / PUBLIC / PRIVATE 와 조합 표
  - variable:           Environment가 소유하는 변수
  - linear_combination: 변수의 가중합 + 상수항
  - constraint:         A·B = C
  - environment:        변수·제약 저장소 (회로 빌드당 하나)
  - gadgets:            Boolean, Field 연산 라이브러리
  - r1cs:               (r, A, B, C) 행렬 내보내기

사용 예시:
    >>> from zkp.circuit import Environment, Field, Mode
    >>> env = Environment()
    >>> a = Field.new(env, Mode.PRIVATE, 0)
    >>> b = Field.new(env, Mode.PRIVATE, 1)
    >>> a.div(b).value          # FR(0)
    >>> env.num_constraints     # 2 (inverse + mul)
"""

from zkp.circuit.environment import Count, Environment
from zkp.circuit.errors import (
    ArithmeticUndefinedError,
    BitRangeError,
    CircuitError,
    ConstantConstraintError,
    EnvironmentFrozenError,
    ForeignReferenceError,
)
from zkp.circuit.field import CAPACITY, CURVE_ORDER, FIELD_SIZE_IN_BITS, FR
from zkp.circuit.gadgets import Boolean, Field
from zkp.circuit.linear_combination import LinearCombination
from zkp.circuit.mode import Mode
from zkp.circuit.variable import Variable

__all__ = [
    "ArithmeticUndefinedError",
    "BitRangeError",
    "Boolean",
    "CAPACITY",
    "CURVE_ORDER",
    "CircuitError",
    "ConstantConstraintError",
    "Count",
    "Environment",
    "EnvironmentFrozenError",
    "FIELD_SIZE_IN_BITS",
    "FR",
    "Field",
    "ForeignReferenceError",
    "LinearCombination",
    "Mode",
    "Variable",
]
