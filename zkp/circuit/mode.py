"""
가시성 모드 (Mode)
===================

회로 값의 가시성 분류:
  - CONSTANT: 회로 구성 시점에 알려진 값. 변수가 필요 없다.
  - PUBLIC:   검증자(verifier)에게 공개되는 값.
  - PRIVATE:  증명자(prover)만 아는 위트니스.

**조합 표 (most-private-wins)**:
  | a \\ b    | CONSTANT | PUBLIC  | PRIVATE |
  |----------|----------|---------|---------|
  | CONSTANT | CONSTANT | PUBLIC  | PRIVATE |
  | PUBLIC   | PUBLIC   | PUBLIC  | PRIVATE |
  | PRIVATE  | PRIVATE  | PRIVATE | PRIVATE |

  CONSTANT는 항등원이다. 두 피연산자가 모두 CONSTANT이면 연산은
  평문으로 계산되고 제약을 하나도 만들지 않는다.
"""

from enum import Enum


class Mode(Enum):
    CONSTANT = "constant"
    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def label(self):
        """내보내기용 이름: Constant / Public / Private."""
        return self.value.capitalize()

    def is_constant(self):
        return self is Mode.CONSTANT

    def is_public(self):
        return self is Mode.PUBLIC

    def is_private(self):
        return self is Mode.PRIVATE

    def combine(self, other):
        """두 모드의 조합 결과 (조합 표 참조)."""
        return _COMBINATION_TABLE[(self, other)]

    @staticmethod
    def combine_all(modes):
        """여러 모드를 왼쪽부터 차례로 조합한다. 빈 입력은 CONSTANT."""
        result = Mode.CONSTANT
        for mode in modes:
            result = result.combine(mode)
        return result


_COMBINATION_TABLE = {
    (Mode.CONSTANT, Mode.CONSTANT): Mode.CONSTANT,
    (Mode.CONSTANT, Mode.PUBLIC): Mode.PUBLIC,
    (Mode.CONSTANT, Mode.PRIVATE): Mode.PRIVATE,
    (Mode.PUBLIC, Mode.CONSTANT): Mode.PUBLIC,
    (Mode.PUBLIC, Mode.PUBLIC): Mode.PUBLIC,
    (Mode.PUBLIC, Mode.PRIVATE): Mode.PRIVATE,
    (Mode.PRIVATE, Mode.CONSTANT): Mode.PRIVATE,
    (Mode.PRIVATE, Mode.PUBLIC): Mode.PRIVATE,
    (Mode.PRIVATE, Mode.PRIVATE): Mode.PRIVATE,
}
