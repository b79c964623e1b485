"""
회로 디버그 내보내기 직렬화/역직렬화
======================================

완성된 Environment를 JSON/TinyDB에 저장 가능한 형태로 변환한다.
구현 간 제약 목록 비교(conformance)에 쓰이며, 다음을 보장한다:
  - 변수는 할당 순서, 제약은 등록 순서 그대로
  - 선형 결합마다 모든 항을 나열 (변수 이름 → 계수)
  - 필드 원소는 10진 문자열
"""

from zkp.circuit.environment import Environment
from zkp.circuit.field import FR
from zkp.circuit.linear_combination import LinearCombination
from zkp.circuit.mode import Mode


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


# ─── Mode ───

def serialize_mode(mode):
    """Mode → "constant" / "public" / "private" """
    return mode.value


def deserialize_mode(s):
    return Mode(s)


# ─── Variable ───

def serialize_variable(variable):
    """Variable → dict"""
    return {
        "name": variable.name,
        "mode": serialize_mode(variable.mode),
        "value": serialize_fr(variable.value),
    }


# ─── LinearCombination ───

def serialize_lc(lc):
    """LinearCombination → {"constant": str, "terms": [[name, str], ...]}"""
    return {
        "constant": serialize_fr(lc.constant),
        "terms": [[v.name, serialize_fr(c)] for v, c in lc.terms.items()],
    }


def deserialize_lc(data, variables_by_name):
    """dict → LinearCombination (변수 이름은 같은 Environment에서 찾는다)"""
    lc = LinearCombination(deserialize_fr(data["constant"]))
    for name, coefficient in data["terms"]:
        term = LinearCombination.from_variable(variables_by_name[name])
        lc = lc.add(term.scale(deserialize_fr(coefficient)))
    return lc


# ─── Constraint ───

def serialize_constraint(constraint):
    """Constraint → dict"""
    return {
        "index": constraint.index,
        "scope": constraint.scope,
        "a": serialize_lc(constraint.a),
        "b": serialize_lc(constraint.b),
        "c": serialize_lc(constraint.c),
    }


# ─── Environment ───

def serialize_counts(env):
    count = env.count()
    return {
        "num_constants": count.constants,
        "num_public": count.public,
        "num_private": count.private,
        "num_constraints": count.constraints,
        "num_nonzeros": list(env.num_nonzeros),
    }


def serialize_environment(env):
    """Environment → dict"""
    return {
        "name": env.name,
        "counts": serialize_counts(env),
        "is_satisfied": env.is_satisfied(),
        "variables": [serialize_variable(v) for v in env.variables],
        "constraints": [serialize_constraint(c) for c in env.constraints],
    }


def deserialize_environment(data):
    """dict → Environment (같은 변수 순서, 같은 제약 순서로 다시 구성한 뒤 고정)"""
    env = Environment(data["name"])
    variables_by_name = {}
    for entry in data["variables"]:
        variable = env.new_variable(deserialize_mode(entry["mode"]), deserialize_fr(entry["value"]))
        variables_by_name[variable.name] = variable

    for entry in data["constraints"]:
        constraint = env.enforce(
            deserialize_lc(entry["a"], variables_by_name),
            deserialize_lc(entry["b"], variables_by_name),
            deserialize_lc(entry["c"], variables_by_name),
        )
        if constraint is not None:
            constraint.scope = entry.get("scope", "")
    return env.freeze()


# ─── 표시 헬퍼 ───

def fr_short(val):
    """FR → 축약 문자열 (UI 표시용)"""
    if val is None:
        return "None"
    s = str(int(val))
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]


def constraint_short(constraint):
    """Constraint → "(A) * (B) = (C)" 축약 문자열"""
    def lc_short(lc):
        parts = [fr_short(lc.constant)] if lc.constant != FR(0) or not lc.terms else []
        for variable, coefficient in lc.terms.items():
            if coefficient == FR(1):
                parts.append(variable.name)
            else:
                parts.append(f"{fr_short(coefficient)}·{variable.name}")
        return " + ".join(parts)
    return f"({lc_short(constraint.a)}) * ({lc_short(constraint.b)}) = ({lc_short(constraint.c)})"
