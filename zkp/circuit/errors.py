"""
회로 구성 오류
===============

| 예외                       | 발생 시점                                        |
|----------------------------|--------------------------------------------------|
| ForeignReferenceError      | 다른 Environment의 변수/LC를 섞어 쓸 때 (즉시)    |
| ArithmeticUndefinedError   | 상수 0의 역원, 상수 비잉여의 제곱근 (즉시)        |
| BitRangeError              | 필드를 넘는 비트 시퀀스 재구성 (즉시)             |
| ConstantConstraintError    | 상수만으로 이루어진 제약이 거짓일 때 (즉시)       |
| EnvironmentFrozenError     | freeze() 이후 변경 시도                           |

Public/Private 피연산자에서의 같은 상황은 예외가 아니라
"만족 불가능한 제약"으로 남으며, Environment.is_satisfied()로만 드러난다.
"""


class CircuitError(Exception):
    """회로 구성 오류의 기반 클래스."""


class ForeignReferenceError(CircuitError):
    """다른 Environment에 속한 변수가 사용됨 (두 회로가 섞임)."""


class ArithmeticUndefinedError(CircuitError, ArithmeticError):
    """상수 피연산자에 대해 정의되지 않는 연산."""


class BitRangeError(CircuitError, ValueError):
    """비트 시퀀스가 필드의 표현 범위를 넘음."""


class ConstantConstraintError(CircuitError):
    """상수 제약 A·B = C 가 성립하지 않음."""


class EnvironmentFrozenError(CircuitError):
    """freeze()된 Environment를 변경하려 함."""
