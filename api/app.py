"""Flask REST API exposing the expense tracker services."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from common.config import Settings, get_settings
from common.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from common.filters import FilterSelection, available_years
from common.models import CATEGORIES
from common.services import DashboardService, ExpenseService
from common.storage import JSONStorage
from common.summaries import summarize
from common.validators import ALL


def create_app(data_dir: Optional[Path] = None, settings: Optional[Settings] = None) -> Flask:
    app = Flask(__name__)
    settings = settings or get_settings()
    app.logger.setLevel(settings.log_level)

    if settings.is_dev:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app)

    storage = JSONStorage(Path(data_dir or settings.data_dir), quota_bytes=settings.quota_bytes)
    expense_service = ExpenseService(storage, settings.resource)
    dashboard = DashboardService(expense_service)

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _selection() -> FilterSelection:
        return FilterSelection(
            category=request.args.get("category") or ALL,
            month=request.args.get("month") or ALL,
            year=request.args.get("year") or ALL,
        )

    @app.get("/categories")
    def list_categories():
        return _success({"items": list(CATEGORIES)})

    @app.get("/years")
    def list_years():
        return _success({"items": available_years(expense_service.all())})

    @app.get("/expenses")
    def list_expenses():
        expenses = dashboard.filtered(_selection())
        return _success({
            "items": [expense.to_dict() for expense in expenses],
            **summarize(expenses).to_dict(),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        expense = expense_service.add(payload)
        return _success(expense.to_dict(), 201)

    @app.get("/expenses/<int:expense_id>")
    def get_expense(expense_id: int):
        expense = expense_service.get(expense_id)
        return _success(expense.to_dict())

    @app.put("/expenses/<int:expense_id>")
    def update_expense(expense_id: int):
        payload = _json_body()
        expense = expense_service.update(expense_id, payload)
        return _success(expense.to_dict())

    @app.post("/expenses/<int:expense_id>/toggle-paid")
    def toggle_paid(expense_id: int):
        expense = expense_service.toggle_paid(expense_id)
        return _success(expense.to_dict())

    @app.delete("/expenses/<int:expense_id>")
    def delete_expense(expense_id: int):
        expense_service.delete(expense_id)
        return _success({}, 204)

    @app.get("/summary")
    def summary():
        view = dashboard.build(_selection())
        return _success(view.to_dict())

    return app
