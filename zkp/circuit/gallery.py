"""
가젯 예제 회로 모음
====================

각 Field 가젯을 a = 0, b = 1 (Private) 위에 한 번씩 구성한 예제 회로.
서로 다른 구현 간 제약 목록을 비교(conformance)할 때 기준으로 쓴다.

  | 이름                     | 회로                                        |
  |--------------------------|---------------------------------------------|
  | add / sub / neg / double | 선형 (제약 0)                               |
  | mul / square             | 곱셈 1                                      |
  | div / div_unchecked      | inverse + mul                               |
  | inverse                  | 0의 역원 → 만족 불가능 (지연된 실패)         |
  | square_root              | sqrt(0)                                     |
  | pow                      | 0^1 (Private 지수 → 비트 분해)              |
  | equal                    | 0 != 1                                      |
  | compare                  | 0 < 1                                       |
  | ternary                  | true ? 0 : 1                                |
  | from_bits_le             | 256개의 false 비트 → 0                      |
  | from_bits_le_diff_const  | 10비트 ≤ 상수 비트열 단언                   |

사용 예시:
    >>> env = build("mul")
    >>> env.num_constraints    # 1
"""

from zkp.circuit.environment import Environment
from zkp.circuit.field import from_bits_le
from zkp.circuit.gadgets.boolean import Boolean, assert_less_than_or_equal_constant
from zkp.circuit.gadgets.field import Field
from zkp.circuit.mode import Mode


def _operands(env):
    a = Field.new(env, Mode.PRIVATE, 0)
    b = Field.new(env, Mode.PRIVATE, 1)
    return a, b


def _add(env):
    a, b = _operands(env)
    return a.add(b)


def _compare(env):
    a, b = _operands(env)
    return a.is_less_than(b)


def _div(env):
    a, b = _operands(env)
    return a.div(b)


def _div_unchecked(env):
    a, b = _operands(env)
    return a.div_unchecked(b)


def _double(env):
    a = Field.new(env, Mode.PRIVATE, 0)
    return a.double()


def _equal(env):
    a, b = _operands(env)
    return a.is_not_equal(b)


def _from_bits_le(env):
    bits = [Boolean.new(env, Mode.PRIVATE, False) for _ in range(256)]
    return Field.from_bits_le(bits)


def _from_bits_le_diff_const(env):
    bits = [Boolean.new(env, Mode.PRIVATE, False) for _ in range(10)]
    bound_bits = [True, True, True, False, False, False, True, True, False, True]
    assert_less_than_or_equal_constant(bits, from_bits_le(bound_bits))
    return bits


def _inverse(env):
    a = Field.new(env, Mode.PRIVATE, 0)
    return a.inverse()


def _mul(env):
    a, b = _operands(env)
    return a.mul(b)


def _neg(env):
    a = Field.new(env, Mode.PRIVATE, 0)
    return a.neg()


def _pow(env):
    a, b = _operands(env)
    return a.pow(b)


def _square(env):
    a = Field.new(env, Mode.PRIVATE, 0)
    return a.square()


def _square_root(env):
    a = Field.new(env, Mode.PRIVATE, 0)
    return a.square_root()


def _sub(env):
    a, b = _operands(env)
    return a.sub(b)


def _ternary(env):
    condition = Boolean.new(env, Mode.PRIVATE, True)
    a, b = _operands(env)
    return Field.ternary(condition, a, b)


CIRCUITS = {
    "add": _add,
    "compare": _compare,
    "div": _div,
    "div_unchecked": _div_unchecked,
    "double": _double,
    "equal": _equal,
    "from_bits_le": _from_bits_le,
    "from_bits_le_diff_const": _from_bits_le_diff_const,
    "inverse": _inverse,
    "mul": _mul,
    "neg": _neg,
    "pow": _pow,
    "square": _square,
    "square_root": _square_root,
    "sub": _sub,
    "ternary": _ternary,
}


def names():
    return list(CIRCUITS)


def build(name):
    """이름의 예제 회로를 새 Environment에 구성하고 고정(freeze)한다.

    Raises:
        KeyError: 알 수 없는 이름
    """
    if name not in CIRCUITS:
        raise KeyError(f"알 수 없는 예제 회로: {name}")
    env = Environment(name)
    CIRCUITS[name](env)
    return env.freeze()
