"""
blobkzg 서비스 진입점
======================

블롭 KZG 엔진과 블롭 캐시를 JSON 엔드포인트로 노출하는 Flask 앱.

실행:
    BLOBKZG_SETUP_G1_PATH=g1.bin BLOBKZG_SETUP_G2_PATH=g2.bin python app.py

설정 경로가 없으면 SRS 없이 시작하며, 커밋먼트/증명 엔드포인트는
NO_TRUSTED_SETUP(503)으로 응답한다. 모의 SRS는 앱에서 로드하지 않는다.
"""

import logging

from flask import Flask, jsonify

from blobkzg.cache.blob_cache import BlobCache
from blobkzg.config import configure_logging, get_settings
from blobkzg.kzg.loader import load_setup_files
from blobkzg.kzg.setup import TrustedSetupManager

from kzg_routes import init_kzg_bp, kzg_bp

log = logging.getLogger(__name__)


def create_app(settings=None, manager=None, cache=None):
    """앱 팩토리.

    Args:
        settings: Settings (없으면 환경 변수에서 읽음)
        manager: 미리 준비한 TrustedSetupManager (테스트용 주입)
        cache: 미리 준비한 BlobCache
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if manager is None:
        manager = TrustedSetupManager()
        if settings.has_setup_paths:
            load_setup_files(
                manager,
                settings.setup_g1_path,
                settings.setup_g2_path,
                settings.setup_format,
            )
        else:
            log.warning("no trusted setup configured; KZG endpoints will return 503")

    if cache is None:
        cache = BlobCache(
            max_entries=settings.cache_max_entries,
            max_bytes=settings.cache_max_bytes,
            strict_reverify=settings.cache_strict_reverify,
        )

    app = Flask(__name__)
    init_kzg_bp(app, manager, cache)
    app.register_blueprint(kzg_bp)

    @app.route("/")
    def index():
        return jsonify({
            "service": "blobkzg",
            "setup_loaded": manager.is_loaded,
            "cache_entries": len(cache),
        })

    return app


if __name__ == "__main__":
    create_app().run()
