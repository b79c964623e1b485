"""
필드 가젯 데모: 예제 회로별 제약 수
=====================================

실행:
    python -m zkp.circuit.example              # 모든 예제의 개수 표
    python -m zkp.circuit.example mul div      # 일부만
    python -m zkp.circuit.example pow --json   # 내보내기 JSON 출력

흐름:
    1. 예제 회로 구성 (a = 0, b = 1)
    2. 변수/제약 수 집계
    3. 위트니스로 만족 여부 확인
"""

import argparse
import json

from circuit_serializers import serialize_environment
from zkp.circuit import gallery


def summarize(name):
    env = gallery.build(name)
    count = env.count()
    return {
        "name": name,
        "constants": count.constants,
        "public": count.public,
        "private": count.private,
        "constraints": count.constraints,
        "satisfied": env.is_satisfied(),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="필드 가젯 예제 회로의 제약 수를 출력한다")
    parser.add_argument("names", nargs="*", help="예제 이름 (기본: 전체)")
    parser.add_argument("--json", action="store_true", help="회로 전체를 JSON으로 출력")
    args = parser.parse_args(argv)

    names = args.names or gallery.names()
    unknown = [name for name in names if name not in gallery.CIRCUITS]
    if unknown:
        parser.error(f"알 수 없는 예제: {', '.join(unknown)}")

    if args.json:
        for name in names:
            print(f"// {name}")
            print(json.dumps(serialize_environment(gallery.build(name)), indent=2))
        return 0

    print("=" * 72)
    print(f"  {'circuit':<26}{'const':>7}{'public':>8}{'private':>9}{'constraints':>13}  ok")
    print("=" * 72)
    for name in names:
        row = summarize(name)
        mark = "✓" if row["satisfied"] else "✗"
        print(f"  {row['name']:<26}{row['constants']:>7}{row['public']:>8}"
              f"{row['private']:>9}{row['constraints']:>13}  {mark}")
    print("=" * 72)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
