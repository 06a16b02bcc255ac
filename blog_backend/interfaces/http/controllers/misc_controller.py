# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

HEALTH_PAYLOAD = {"status": "ok", "message": "Blog API is running"}


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        return jsonify(HEALTH_PAYLOAD)
