"""
R1CS 행렬 내보내기
===================

완성된 Environment를 Groth16 QAP 파이프라인이 받는 (r, A, B, C) 형식으로 바꾼다.

**배선(wire) 순서**:
    ['~one', Public(0), Public(1), ..., Private(0), Private(1), ...]

  r[0] = 1 이며, 각 제약 i에 대해

    (A[i] · r) × (B[i] · r) = (C[i] · r)   (mod p)

  가 성립한다. 선형 결합의 상수항은 '~one' 열에 들어간다.

예시 (x · x = y, x = 3):
    >>> r, A, B, C = to_r1cs(env)
    >>> r        # [1, 3, 9]
    >>> A        # [[0, 1, 0]]
    >>> B        # [[0, 1, 0]]
    >>> C        # [[0, 0, 1]]
"""

from zkp.circuit.field import CURVE_ORDER
from zkp.circuit.mode import Mode


ONE_WIRE = "~one"


def wire_variables(env):
    """Public 변수 다음에 Private 변수 (각각 할당 순서)."""
    public = [v for v in env.variables if v.mode is Mode.PUBLIC]
    private = [v for v in env.variables if v.mode is Mode.PRIVATE]
    return public + private


def wire_names(env):
    return [ONE_WIRE] + [v.name for v in wire_variables(env)]


def _row(lc, positions, width):
    row = [0] * width
    row[0] = int(lc.constant)
    for variable, coefficient in lc.terms.items():
        row[positions[variable]] = int(coefficient)
    return row


def to_r1cs(env):
    """Environment → (r, A, B, C).

    Returns:
        tuple: r (위트니스 정수 리스트), A, B, C (제약 수 × 배선 수 정수 행렬)
    """
    variables = wire_variables(env)
    positions = {variable: i + 1 for i, variable in enumerate(variables)}
    width = len(variables) + 1

    r = [1] + [int(v.value) for v in variables]
    A, B, C = [], [], []
    for constraint in env.constraints:
        A.append(_row(constraint.a, positions, width))
        B.append(_row(constraint.b, positions, width))
        C.append(_row(constraint.c, positions, width))
    return r, A, B, C


def check_r1cs(r, A, B, C, modulus=CURVE_ORDER):
    """모든 행에 대해 (A·r)(B·r) == C·r (mod p) 인지."""
    for a_row, b_row, c_row in zip(A, B, C):
        a_dot = sum(x * y for x, y in zip(a_row, r)) % modulus
        b_dot = sum(x * y for x, y in zip(b_row, r)) % modulus
        c_dot = sum(x * y for x, y in zip(c_row, r)) % modulus
        if a_dot * b_dot % modulus != c_dot:
            return False
    return True
