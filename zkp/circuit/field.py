"""
회로 기반 모듈: 스칼라 필드 FR
================================

제약 시스템의 모든 값은 bn128 스칼라 필드 FR 위의 원소이다.
py_ecc의 FQ를 상속해 +, -, *, /, ** 연산을 그대로 사용한다.

**필드 크기 상수**:
  - FIELD_SIZE_IN_BITS: p의 비트 길이 (254)
  - CAPACITY: 모든 값이 p보다 작음이 보장되는 최대 비트 수 (253)

  254비트 시퀀스는 p 이상의 값도 표현할 수 있으므로(모호한 표현),
  비트 재구성 가젯은 254비트일 때 범위 검사를 추가한다.

**제곱근**:
  p - 1 = 2^28 × m 이므로 Tonelli-Shanks 알고리즘을 사용한다.
  두 근 ±r 중 정수 표현이 짝수인 쪽을 대표값(canonical)으로 고른다.

사용 예시:
    >>> from zkp.circuit.field import FR, sqrt
    >>> sqrt(FR(9))   # FR(3) 또는 FR(p - 3) 중 짝수인 값
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소."""
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order

FIELD_SIZE_IN_BITS = CURVE_ORDER.bit_length()

CAPACITY = FIELD_SIZE_IN_BITS - 1


def to_fr(value):
    """정수/bool/FR을 FR로 변환한다."""
    if isinstance(value, FR):
        return value
    if isinstance(value, FQ):
        return FR(value.n)
    if isinstance(value, int):
        return FR(value)
    raise TypeError(f"FR로 변환할 수 없는 값: {value!r}")


# ─────────────────────────────────────────────────────────────────────
# 이차 잉여 (Quadratic Residue)와 제곱근
# ─────────────────────────────────────────────────────────────────────

def legendre(a):
    """르장드르 기호 (a/p): 0, 1, 또는 -1."""
    n = int(a) % CURVE_ORDER
    if n == 0:
        return 0
    symbol = pow(n, (CURVE_ORDER - 1) // 2, CURVE_ORDER)
    return 1 if symbol == 1 else -1


def is_quadratic_residue(a):
    """a가 FR 안에서 제곱근을 가지는지 (0 포함)."""
    return legendre(a) != -1


def _two_adicity():
    q, s = CURVE_ORDER - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    return q, s


def _find_non_residue():
    z = 2
    while legendre(z) != -1:
        z += 1
    return z


_Q, _S = _two_adicity()
_NON_RESIDUE = _find_non_residue()


def sqrt(a):
    """FR 원소의 제곱근을 반환한다 (Tonelli-Shanks).

    두 근 중 정수 표현이 짝수인 근을 반환하므로
    결과는 입력에 대해 결정론적이다.

    Args:
        a: FR 원소 또는 정수

    Returns:
        FR: r·r = a 이고 int(r)가 짝수인 r.
            비잉여(non-residue)이면 None.
    """
    n = int(a) % CURVE_ORDER
    if n == 0:
        return FR(0)
    if legendre(n) != 1:
        return None

    p = CURVE_ORDER
    m = _S
    c = pow(_NON_RESIDUE, _Q, p)
    t = pow(n, _Q, p)
    r = pow(n, (_Q + 1) // 2, p)
    while t != 1:
        # t^(2^i) == 1 인 최소 i
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        r = r * b % p

    if r % 2 == 1:
        r = p - r
    return FR(r)


# ─────────────────────────────────────────────────────────────────────
# 비트 유틸리티
# ─────────────────────────────────────────────────────────────────────

def to_bits_le(value, num_bits=FIELD_SIZE_IN_BITS):
    """정수 표현을 리틀 엔디언 bool 리스트로 분해한다.

    예시:
        >>> to_bits_le(FR(6), 4)
        [False, True, True, False]
    """
    n = int(value)
    return [bool((n >> i) & 1) for i in range(num_bits)]


def from_bits_le(bits):
    """리틀 엔디언 bool 리스트를 정수로 재구성한다 (모듈러 축약 없음)."""
    n = 0
    for i, bit in enumerate(bits):
        if bit:
            n |= 1 << i
    return n
