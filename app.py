"""
KZG 집합 멤버십 데모 서버
=========================

    flask --app app run
    KATE_MAX_DEGREE=32 KATE_SRS_SEED=1234 flask --app app run

앱 생성 시 SRS를 한 번 준비한다 (SRS_PATH 파일이 있으면 재사용).
"""

import logging

from flask import Flask, jsonify

from kate.config import load_config
from kate.srs import SRS
from kzg_routes import init_kzg_bp, kzg_bp

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    """Flask 앱 팩토리.

    Args:
        overrides: 환경 설정 위에 덮어쓸 설정 dict (테스트용)
    """
    config = load_config()
    if overrides:
        config.update(overrides)

    logging.basicConfig(
        level=config["LOG_LEVEL"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = Flask(__name__)
    app.config.from_mapping(config)

    seed = config["SRS_SEED"]
    if config["SRS_PATH"]:
        srs = SRS.load_or_generate(config["SRS_PATH"], config["MAX_DEGREE"], seed=seed)
    else:
        srs = SRS.generate(config["MAX_DEGREE"], seed=seed)

    init_kzg_bp(app, srs)
    app.register_blueprint(kzg_bp)

    @app.route("/")
    def index():
        return jsonify({"service": "kate", "max_degree": srs.max_degree})

    logger.info("app ready (SRS max degree %d)", srs.max_degree)
    return app


if __name__ == "__main__":
    create_app().run()
