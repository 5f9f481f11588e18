from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ipdr_auth.auth import AuthError, AuthService, PasswordHasher, TokenService, ValidationError
from ipdr_auth.config import Settings, load_settings
from ipdr_auth.logging import AuditLog, JsonAuditLog, get_logger
from ipdr_auth.storage import JsonUserStore, StoreError, UserStore

logger = get_logger("api")
access_logger = get_logger("http")

INTERNAL_ERROR = {"error": "Internal server error"}


def _json_body() -> dict[str, Any]:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    token = header[len("Bearer "):].strip()
    return token or None


def _client_ip(data: dict[str, Any]) -> str | None:
    return data.get("ipAddress") or request.remote_addr


def create_app(
    settings: Settings | None = None,
    store: UserStore | None = None,
    audit_log: AuditLog | None = None,
    hasher: PasswordHasher | None = None,
) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["SETTINGS"] = settings

    if store is None:
        json_store = JsonUserStore(settings.users_file)
        json_store.initialize()
        store = json_store
    if audit_log is None:
        json_log = JsonAuditLog(settings.logins_file)
        json_log.initialize()
        audit_log = json_log

    service = AuthService(
        store=store,
        audit_log=audit_log,
        tokens=TokenService(settings.access_token_secret, settings.refresh_token_secret),
        hasher=hasher or PasswordHasher(settings.bcrypt_rounds),
    )
    app.extensions["auth_service"] = service

    @app.errorhandler(AuthError)
    def handle_auth_error(exc: AuthError):
        logger.info("%s %s rejected: %s", request.method, request.path, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(StoreError)
    def handle_store_error(exc: StoreError):
        logger.exception("Storage failure during %s %s", request.method, request.path)
        return jsonify(INTERNAL_ERROR), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.after_request
    def after_request(response):
        response.headers["Access-Control-Allow-Origin"] = settings.cors_origin
        response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        access_logger.info(
            '%s "%s %s" %s',
            request.remote_addr,
            request.method,
            request.full_path.rstrip("?"),
            response.status_code,
        )
        return response

    @app.route("/api/health")
    def health():
        return jsonify({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.route("/api/auth/register", methods=["POST"])
    def register():
        data = _json_body()
        result = service.register(
            username=data.get("username"),
            email=data.get("email"),
            password=data.get("password"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            ip_address=_client_ip(data),
            location=data.get("location"),
        )
        return jsonify(result.as_dict()), 201

    @app.route("/api/auth/login", methods=["POST"])
    def login():
        data = _json_body()
        result = service.login(
            username=data.get("username"),
            password=data.get("password"),
            ip_address=_client_ip(data),
            location=data.get("location"),
        )
        return jsonify(result.as_dict())

    @app.route("/api/auth/refresh", methods=["POST"])
    def refresh():
        data = _json_body()
        access_token = service.refresh(data.get("refreshToken"))
        return jsonify({"accessToken": access_token})

    @app.route("/api/auth/logout", methods=["POST"])
    def logout():
        data = _json_body()
        message = service.logout(
            refresh_token=data.get("refreshToken"),
            ip_address=_client_ip(data),
            location=data.get("location"),
        )
        return jsonify({"message": message})

    @app.route("/api/auth/me")
    def me():
        user = service.me(_bearer_token())
        return jsonify({"user": user.sanitized()})

    @app.route("/api/auth/logs")
    def logs():
        # TODO: restrict to admin-role access tokens once the dashboard sends them.
        return jsonify([entry.to_dict() for entry in service.logs()])

    @app.route("/api/auth/password-strength", methods=["POST"])
    def password_strength():
        data = _json_body()
        password = data.get("password")
        if password is None:
            raise ValidationError("Password is required")
        return jsonify(service.password_strength(password).as_dict())

    return app
