from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from linkout.contrib import registry_from_environment
from linkout.params import CUSTOM_REGEX_TYPE, REGEX_PRESETS
from linkout.service import linkouts_from_payload

REGISTRY = registry_from_environment()

app = Flask(__name__)


@app.get("/api/linkout_types")
def api_linkout_types():
    return jsonify(
        {
            "types": [descriptor.to_payload() for descriptor in REGISTRY.list_types().values()],
            "regex_types": sorted([*REGEX_PRESETS, CUSTOM_REGEX_TYPE]),
        }
    )


@app.post("/api/linkouts")
def api_linkouts():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    if not isinstance(payload.get("database"), dict):
        return jsonify({"error": "database is required"}), 400

    try:
        params, results = linkouts_from_payload(REGISTRY, payload)
    except Exception as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify(
        {
            "database_name": params.database_name,
            "linkout_type": params.linkout_type,
            "linkouts": [result.to_payload() for result in results],
        }
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host="127.0.0.1", port=5000, debug=True, threaded=False)
