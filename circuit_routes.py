"""
회로 Flask Blueprint: 예제 회로 조회/저장 엔드포인트
=======================================================

  | 메서드 | 경로                          | 내용                               |
  |--------|-------------------------------|------------------------------------|
  | GET    | /circuit/                     | 예제 목록과 변수/제약 수           |
  | GET    | /circuit/<name>               | 회로 내보내기 (JSON)               |
  | GET    | /circuit/<name>/check         | 만족 여부와 불만족 제약            |
  | GET    | /circuit/<name>/r1cs          | (r, A, B, C) 행렬                  |
  | POST   | /circuit/<name>/save          | 내보내기를 DB에 저장               |
  | GET    | /circuit/<name>/saved         | 저장된 내보내기 조회               |
  | POST   | /circuit/clear                | 저장된 회로 데이터 삭제            |
"""

import logging

from flask import Blueprint, abort, jsonify
from tinydb import Query

from zkp.circuit import gallery
from zkp.circuit.r1cs import to_r1cs, wire_names

from circuit_serializers import (
    constraint_short,
    deserialize_environment,
    serialize_counts,
    serialize_environment,
)

logger = logging.getLogger(__name__)

circuit_bp = Blueprint('circuit', __name__, url_prefix='/circuit')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_circuit_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def _build_or_404(name):
    if name not in gallery.CIRCUITS:
        abort(404, description=f"알 수 없는 예제 회로: {name}")
    return gallery.build(name)


# ──────────────────────────────────────────────────────────────
# 조회
# ──────────────────────────────────────────────────────────────

@circuit_bp.route("/")
def circuit_list():
    """예제 회로 목록."""
    circuits = []
    for name in gallery.names():
        env = gallery.build(name)
        circuits.append({"name": name, **serialize_counts(env)})
    return jsonify(circuits=circuits)


@circuit_bp.route("/<name>")
def circuit_export(name):
    """예제 회로 전체 내보내기."""
    env = _build_or_404(name)
    return jsonify(serialize_environment(env))


@circuit_bp.route("/<name>/check")
def circuit_check(name):
    """위트니스로 제약 만족 여부를 확인한다."""
    env = _build_or_404(name)
    unsatisfied = [
        {"index": c.index, "scope": c.scope, "constraint": constraint_short(c)}
        for c in env.unsatisfied_constraints()
    ]
    return jsonify(name=name, satisfied=not unsatisfied, unsatisfied=unsatisfied)


@circuit_bp.route("/<name>/r1cs")
def circuit_r1cs(name):
    """R1CS 행렬 (정수는 10진 문자열)."""
    env = _build_or_404(name)
    r, A, B, C = to_r1cs(env)

    def stringify(matrix):
        return [[str(x) for x in row] for row in matrix]

    return jsonify(
        wires=wire_names(env),
        r=[str(x) for x in r],
        A=stringify(A),
        B=stringify(B),
        C=stringify(C),
    )


# ──────────────────────────────────────────────────────────────
# 저장
# ──────────────────────────────────────────────────────────────

@circuit_bp.route("/<name>/save", methods=["POST"])
def circuit_save(name):
    """내보내기를 DB에 저장한다."""
    env = _build_or_404(name)
    data = serialize_environment(env)
    db_set(f"circuit.{name}", data)
    logger.info("회로 '%s' 저장: 제약 %d개", name, env.num_constraints)
    return jsonify(saved=name, counts=data["counts"])


@circuit_bp.route("/<name>/saved")
def circuit_saved(name):
    """저장된 내보내기를 다시 구성해 만족 여부와 함께 반환한다."""
    data = db_get(f"circuit.{name}")
    if data is None:
        abort(404, description=f"저장된 회로가 없습니다: {name}")
    env = deserialize_environment(data)
    return jsonify(name=name, satisfied=env.is_satisfied(), circuit=data)


@circuit_bp.route("/clear", methods=["POST"])
def circuit_clear():
    """저장된 회로 데이터를 모두 삭제한다."""
    db_remove_prefix("circuit.")
    return jsonify(cleared=True)
