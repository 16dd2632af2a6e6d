# elemental/main.py
from __future__ import annotations

import logging
import os
import traceback
from time import perf_counter

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from elemental.api.routes import api
from elemental.core.compare import ChartSettings
from elemental.core.profile import ElementProfiler
from elemental.utils import metrics
from elemental.utils.config import config_path, load_config

# ───────────────────────── helpers: logging & errors ─────────────────────────
def _configure_logging(app: Flask) -> None:
    gerr = logging.getLogger("gunicorn.error")
    if gerr.handlers:
        app.logger.handlers = gerr.handlers
        app.logger.setLevel(gerr.level)
    else:
        logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

def _register_errors(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        app.logger.warning("HTTP %s at %s %s: %s", e.code, request.method, request.path, e.description)
        return jsonify(
            ok=False,
            error="http_error",
            code=e.code,
            name=e.name,
            message=e.description,
            path=request.path,
        ), e.code

    @app.errorhandler(Exception)
    def _any(e: Exception):
        tb = traceback.format_exc()
        app.logger.error("UNHANDLED %s at %s %s\n%s", type(e).__name__, request.method, request.path, tb)
        return jsonify(
            ok=False,
            error="internal_error",
            type=type(e).__name__,
            message=str(e),
            path=request.path,
        ), 500

# ───────────────────────── health & metrics ─────────────────────────
def _register_health(app: Flask) -> None:
    @app.route("/", methods=["GET"])
    def root():
        return jsonify(ok=True, service="elemental", health="/health"), 200

    @app.route("/health", methods=["GET"])
    @app.route("/healthz", methods=["GET"])
    def health():
        return jsonify(ok=True, status="ok"), 200

def _metrics_auth_ok() -> bool:
    auth = request.authorization
    user = os.getenv("METRICS_USER", "")
    pw = os.getenv("METRICS_PASS", "")
    return bool(
        auth and auth.type == "basic" and auth.username == user and auth.password == pw and user and pw
    )

def _route_label() -> str:
    # rule, not raw path: unknown URLs must not mint new series
    return request.url_rule.rule if request.url_rule is not None else "unmatched"

def _register_metrics(app: Flask) -> None:
    @app.before_request
    def _before():
        if metrics.is_tracked(request.path or ""):
            metrics.MET_REQUESTS.labels(route=_route_label()).inc()
            request._t0 = perf_counter()

    @app.after_request
    def _after(resp):
        if metrics.is_tracked(request.path or "") and hasattr(request, "_t0"):
            metrics.REQ_LATENCY.labels(route=_route_label()).observe(perf_counter() - request._t0)
        return resp

    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint():
        if not _metrics_auth_ok():
            return Response("Unauthorized", 401, {"WWW-Authenticate": 'Basic realm="metrics"'})
        metrics.GAUGE_APP_UP.set(1.0)
        return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)

# ───────────────────────── app factory ─────────────────────────
def create_app(config: dict | None = None) -> Flask:
    """
    Build the app. `config` (already-loaded dict) wins over the YAML file at
    $ELEMENTAL_CONFIG; an invalid configuration fails here, not per request.
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore

    _configure_logging(app)

    cfg = config if config is not None else load_config(config_path())
    profiler = ElementProfiler.from_config(cfg)
    chart = ChartSettings.from_config(cfg)
    app.extensions["elemental"] = {"config": cfg, "profiler": profiler, "chart": chart}

    _register_health(app)
    _register_errors(app)
    _register_metrics(app)
    app.register_blueprint(api)

    metrics.seed(str(r) for r in app.url_map.iter_rules() if metrics.is_tracked(str(r)))

    app.logger.info(
        "App initialized; bodies=%s expected_total=%s", ",".join(profiler.bodies), profiler.expected_total
    )
    return app

# ───────────────────────── app instance ─────────────────────────
app = create_app()

# CORS for browser UIs
_allowed_origin = os.environ.get("CORS_ALLOW_ORIGIN") or "*"
CORS(
    app,
    resources={r"/.*": {"origins": _allowed_origin}},
    supports_credentials=False,
    methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
