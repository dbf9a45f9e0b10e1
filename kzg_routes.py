"""
KZG Flask Blueprint — 블롭 KZG 엔드포인트
==========================================

핵심 엔진(커밋먼트, 증명, 검증, 버전 해시, 블롭 캐시)을 JSON 엔드포인트로
노출한다. 모든 바이트열은 "0x" 16진수, 스칼라는 10진수 문자열이다.

  GET    /kzg/setup                      SRS 로드 상태
  POST   /kzg/commit                     {blob} → {commitment, versioned_hash}
  POST   /kzg/proof                      {blob, z} → {proof, value}
  POST   /kzg/verify                     {commitment, z, value, proof} → {valid}
  POST   /kzg/blob-proof                 {blob} → {commitment, proof, versioned_hash}
  POST   /kzg/encode                     {data, codec} → {blob}
  POST   /kzg/decode                     {blob, codec} → {data}
  GET    /kzg/cache                      캐시 통계
  POST   /kzg/cache                      {blob, slot, index, source} → 항목 요약
  GET    /kzg/cache/<versioned_hash>     항목 요약 (없으면 404)
  DELETE /kzg/cache/<versioned_hash>     {removed}
  POST   /kzg/cache/clear                {cleared}
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from blobkzg.cache.blob_cache import MISS
from blobkzg.cache.verifier import KZGBlobVerifier
from blobkzg.codecs import RAW, decode_payload, encode_payload, get_codec
from blobkzg.kzg.commitment import CommitmentEngine
from blobkzg.kzg.errors import KZGError, SetupNotLoaded
from blobkzg.kzg.proof import ProofEngine
from blobkzg.kzg.versioned_hash import to_versioned_hash

from kzg_serializers import (
    SerializationError,
    bytes_short,
    deserialize_bytes,
    deserialize_scalar,
    serialize_bytes,
    serialize_entry,
    serialize_scalar,
    serialize_stats,
)

log = logging.getLogger(__name__)

kzg_bp = Blueprint('kzg', __name__, url_prefix='/kzg')


class KZGService:
    """블루프린트가 사용하는 엔진/캐시 묶음."""

    def __init__(self, manager, cache):
        self.manager = manager
        self.cache = cache
        self.commitments = CommitmentEngine(manager)
        self.proofs = ProofEngine(manager)
        self.verifier = KZGBlobVerifier(manager)


def init_kzg_bp(app, manager, cache):
    """app.py에서 SRS 매니저와 캐시를 주입받는다."""
    app.extensions["blobkzg"] = KZGService(manager, cache)


def _service():
    return current_app.extensions["blobkzg"]


def _body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise SerializationError("request body must be a JSON object")
    return data


def _required(data, key):
    if key not in data:
        raise SerializationError(f"missing field: {key}")
    return data[key]


# ─── 오류 처리 ───

@kzg_bp.errorhandler(SetupNotLoaded)
def handle_setup_not_loaded(e):
    return jsonify({"error": e.to_dict()}), 503


@kzg_bp.errorhandler(KZGError)
def handle_kzg_error(e):
    return jsonify({"error": e.to_dict()}), 400


# ──────────────────────────────────────────────────────────────
# 신뢰 설정
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/setup")
def setup_status():
    """SRS 로드 상태."""
    manager = _service().manager
    if not manager.is_loaded:
        return jsonify({"loaded": False, "g1_points": 0, "g2_points": 0})
    setup = manager.setup
    return jsonify({
        "loaded": True,
        "g1_points": len(setup.g1_powers),
        "g2_points": len(setup.g2_powers),
    })


# ──────────────────────────────────────────────────────────────
# 커밋먼트 / 증명 / 검증
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/commit", methods=["POST"])
def commit():
    """블롭 커밋먼트와 버전 해시."""
    blob = deserialize_bytes(_required(_body(), "blob"), "blob")
    commitment = _service().commitments.commit(blob)
    return jsonify({
        "commitment": serialize_bytes(commitment),
        "versioned_hash": serialize_bytes(to_versioned_hash(commitment)),
    })


@kzg_bp.route("/proof", methods=["POST"])
def proof():
    """z에서의 열기 증명과 평가값."""
    data = _body()
    blob = deserialize_bytes(_required(data, "blob"), "blob")
    z = deserialize_scalar(_required(data, "z"), "z")
    pi, value = _service().proofs.open(blob, z)
    return jsonify({"proof": serialize_bytes(pi), "value": serialize_scalar(value)})


@kzg_bp.route("/verify", methods=["POST"])
def verify():
    """(commitment, z, value, proof) 검증. 잘못된 입력은 valid=false."""
    data = _body()
    try:
        commitment = deserialize_bytes(_required(data, "commitment"), "commitment")
        proof_bytes = deserialize_bytes(_required(data, "proof"), "proof")
        z = deserialize_scalar(_required(data, "z"), "z")
        value = deserialize_scalar(_required(data, "value"), "value")
    except SerializationError as e:
        log.debug("verify request rejected: %s", e)
        return jsonify({"valid": False})
    valid = _service().proofs.verify(commitment, z, value, proof_bytes)
    return jsonify({"valid": valid})


@kzg_bp.route("/blob-proof", methods=["POST"])
def blob_proof():
    """Fiat-Shamir 챌린지에서의 블롭 증명."""
    blob = deserialize_bytes(_required(_body(), "blob"), "blob")
    svc = _service()
    commitment = svc.commitments.commit(blob)
    pi = svc.proofs.compute_blob_proof(blob, commitment)
    return jsonify({
        "commitment": serialize_bytes(commitment),
        "proof": serialize_bytes(pi),
        "versioned_hash": serialize_bytes(to_versioned_hash(commitment)),
    })


# ──────────────────────────────────────────────────────────────
# 페이로드 인코딩
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/encode", methods=["POST"])
def encode():
    """페이로드 → 블롭. raw 코덱은 data를 16진수로 받는다."""
    data = _body()
    codec = data.get("codec", RAW)
    get_codec(codec)
    payload = _required(data, "data")
    if codec == RAW:
        payload = deserialize_bytes(payload, "data")
    return jsonify({"blob": serialize_bytes(encode_payload(payload, codec))})


@kzg_bp.route("/decode", methods=["POST"])
def decode():
    """블롭 → 페이로드."""
    data = _body()
    codec = data.get("codec", RAW)
    blob = deserialize_bytes(_required(data, "blob"), "blob")
    payload = decode_payload(blob, codec)
    if isinstance(payload, bytes):
        payload = serialize_bytes(payload)
    return jsonify({"data": payload})


# ──────────────────────────────────────────────────────────────
# 블롭 캐시
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/cache", methods=["GET"])
def cache_stats():
    return jsonify(serialize_stats(_service().cache.stats()))


@kzg_bp.route("/cache", methods=["POST"])
def cache_put():
    """블롭의 커밋먼트/증명을 계산해 캐시에 넣는다."""
    data = _body()
    blob = deserialize_bytes(_required(data, "blob"), "blob")
    svc = _service()
    entry = svc.verifier.build_entry(
        blob,
        slot=deserialize_scalar(data.get("slot", 0), "slot"),
        index=deserialize_scalar(data.get("index", 0), "index"),
        source=str(data.get("source", "local")),
    )
    svc.cache.put(entry.versioned_hash, entry)
    log.info("cached blob %s", bytes_short(entry.versioned_hash))
    return jsonify(serialize_entry(entry)), 201


@kzg_bp.route("/cache/<versioned_hash>", methods=["GET"])
def cache_get(versioned_hash):
    key = deserialize_bytes(versioned_hash, "versioned_hash")
    svc = _service()
    entry = svc.cache.get_with_reverify(key, svc.verifier)
    if entry is MISS:
        return jsonify({"error": {"code": "NOT_FOUND", "message": "blob not cached"}}), 404
    include_blob = request.args.get("blob", "").lower() in ("1", "true", "yes")
    return jsonify(serialize_entry(entry, include_blob=include_blob))


@kzg_bp.route("/cache/<versioned_hash>", methods=["DELETE"])
def cache_delete(versioned_hash):
    key = deserialize_bytes(versioned_hash, "versioned_hash")
    return jsonify({"removed": _service().cache.remove(key)})


@kzg_bp.route("/cache/clear", methods=["POST"])
def cache_clear():
    _service().cache.clear()
    return jsonify({"cleared": True})
