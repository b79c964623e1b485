"""
R1CS 제약 (Constraint)
=======================

하나의 제약은 세 선형 결합의 순서쌍 (A, B, C)이며 위트니스에 대해

    A · B = C

가 성립함을 주장한다. 곱셈 하나가 제약 하나에 대응한다.
"""


class Constraint:
    """A·B = C 형태의 랭크-1 제약.

    속성:
        index: Environment 안에서의 등록 순번
        a, b, c: LinearCombination
        scope: 등록 당시의 스코프 경로 (예: "is_less_than/to_bits_le")
    """

    def __init__(self, index, a, b, c, scope=""):
        self.index = index
        self.a = a
        self.b = b
        self.c = c
        self.scope = scope

    def evaluate(self):
        """(A값, B값, C값)을 반환한다."""
        return self.a.value, self.b.value, self.c.value

    def is_satisfied(self):
        """A·B == C ?"""
        a, b, c = self.evaluate()
        return a * b == c

    def num_nonzeros(self):
        return (self.a.num_nonzeros(), self.b.num_nonzeros(), self.c.num_nonzeros())

    def __repr__(self):
        where = f" @{self.scope}" if self.scope else ""
        return f"Constraint#{self.index}{where}: ({self.a}) * ({self.b}) = ({self.c})"
