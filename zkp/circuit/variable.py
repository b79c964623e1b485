"""
회로 변수 (Variable)
=====================

Environment가 할당하는 원자 단위. 한 번 할당되면 변경되지 않는다.
변수의 동일성(identity)은 객체 자체이므로 LinearCombination의 키로 쓰인다.
"""


class Variable:
    """Environment 안의 변수 하나.

    속성:
        env: 이 변수를 소유한 Environment
        mode: Mode (CONSTANT / PUBLIC / PRIVATE)
        index: 같은 모드 안에서의 할당 순번
        value: 할당된 위트니스 값 (FR)
    """

    def __init__(self, env, mode, index, value):
        self._env = env
        self._mode = mode
        self._index = index
        self._value = value

    @property
    def env(self):
        return self._env

    @property
    def mode(self):
        return self._mode

    @property
    def index(self):
        return self._index

    @property
    def value(self):
        return self._value

    @property
    def name(self):
        """예: Public(0), Private(3)."""
        return f"{self._mode.label}({self._index})"

    def is_constant(self):
        return self._mode.is_constant()

    def __repr__(self):
        return f"Variable({self.name} = {int(self._value)})"
