"""
필드 가젯 회로 뷰어 (Flask)
============================

환경 변수 설정:
  - CIRCUIT_DB_PATH:    TinyDB 파일 경로 (기본 "db.json")
  - CIRCUIT_SECRET_KEY: Flask secret key
  - CIRCUIT_LOG_LEVEL:  로깅 레벨 (기본 "INFO")

실행:
    flask --app app run
"""

import logging
import os

from flask import Flask, jsonify
from tinydb import TinyDB

from circuit_routes import circuit_bp, init_circuit_bp
from zkp.circuit.field import CURVE_ORDER, FIELD_SIZE_IN_BITS, CAPACITY

DB_PATH = os.environ.get("CIRCUIT_DB_PATH", "db.json")
SECRET_KEY = os.environ.get("CIRCUIT_SECRET_KEY", "key")
LOG_LEVEL = os.environ.get("CIRCUIT_LOG_LEVEL", "INFO")


def create_app(db=None):
    """Flask 앱을 만든다.

    Args:
        db: TinyDB 인스턴스. 없으면 CIRCUIT_DB_PATH 파일을 연다.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = SECRET_KEY

    if db is None:
        db = TinyDB(DB_PATH)
    init_circuit_bp(db.table("circuit"))
    app.register_blueprint(circuit_bp)

    @app.route("/")
    def main():
        return jsonify(
            field_modulus=str(CURVE_ORDER),
            field_size_in_bits=FIELD_SIZE_IN_BITS,
            capacity=CAPACITY,
        )

    return app
