# tabsettle/app.py
import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from tabsettle.config import Settings, settings as default_settings
from tabsettle.exceptions import ArithmeticInvariantError, InvalidInputError
from tabsettle.ledger import Expense, build_participants, total_expenses, weighted_shares
from tabsettle.log import configure_logging
from tabsettle.settlement import Participant, compute_settlement

logger = logging.getLogger(__name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInputError("request body must be a JSON object")
    return data


def _require(item, key, where):
    if not isinstance(item, dict) or key not in item:
        raise InvalidInputError(f"each {where} needs a '{key}' field")
    return item[key]


def _member_id(value, where):
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidInputError(f"{where} must be a string or an integer, got {value!r}")
    return value


def _id_list(data, key):
    ids = data.get(key)
    if not isinstance(ids, list):
        raise InvalidInputError(f"'{key}' must be a list")
    return [_member_id(member, f"'{key}' entries") for member in ids]


def parse_participants(data):
    items = data.get("participants")
    if not isinstance(items, list):
        raise InvalidInputError("'participants' must be a list")
    return [
        Participant(
            id=_require(item, "id", "participant"),
            paid=_require(item, "paid", "participant"),
            owed=_require(item, "owed", "participant"),
        )
        for item in items
    ]


def parse_expenses(data):
    items = data.get("expenses", [])
    if not isinstance(items, list):
        raise InvalidInputError("'expenses' must be a list")
    return [
        Expense(
            _member_id(_require(item, "payer", "expense"), "expense payer"),
            _require(item, "amount", "expense"),
            item.get("title"),
        )
        for item in items
    ]


def parse_weights(data, roster):
    weights = data.get("weights")
    if weights is None:
        return None
    if not isinstance(weights, dict):
        raise InvalidInputError("'weights' must be an object keyed by attendee id")
    # JSON object keys are always strings
    unknown = set(weights) - {str(member) for member in roster}
    if unknown:
        raise InvalidInputError(f"weights name non-attendees: {sorted(unknown)!r}")
    try:
        return {member: weights[str(member)] for member in roster}
    except KeyError as e:
        raise InvalidInputError(f"no weight given for attendee {e.args[0]!r}") from e


def create_app(settings: Optional[Settings] = None):
    settings = settings or default_settings

    app = Flask(__name__)
    app.config["DEBUG"] = settings.DEBUG
    app.config["APP_NAME"] = settings.APP_NAME
    app.json.sort_keys = settings.JSON_SORT_KEYS

    CORS(app, resources={r"/api/*": {"origins": settings.CORS_ORIGINS}})  # lets the frontend talk to this backend

    register_error_handlers(app)
    register_routes(app)
    return app


def register_error_handlers(app):
    @app.errorhandler(InvalidInputError)
    def invalid_input(e):
        logger.info("Rejected settlement request: %s", e)
        return jsonify({"error": "invalid_input", "message": str(e)}), 400

    @app.errorhandler(ArithmeticInvariantError)
    def invariant_violation(e):
        logger.exception("Balances do not net out")
        return jsonify({"error": "invariant_violation", "message": str(e)}), 500


def register_routes(app):
    # --- 1. HEALTH CHECK ROUTE ---
    @app.route("/api", methods=["GET"])
    def health_check():
        return jsonify({"status": "healthy", "message": f"{app.config['APP_NAME']} is running!"})

    # --- 2. SETTLE PRE-AGGREGATED BALANCES ---
    @app.route("/api/settle", methods=["POST"])
    def settle_balances():
        participants = parse_participants(_json_body())
        plan = compute_settlement(participants)
        return jsonify(plan.as_dict())

    # --- 3. CALCULATION ROUTE ---
    # Raw expenses + attendee roster; shares are worked out here
    @app.route("/api/calculate", methods=["POST"])
    def calculate():
        data = _json_body()
        roster = _id_list(data, "attendees")
        expenses = parse_expenses(data)
        total = total_expenses(expenses)

        weights = parse_weights(data, roster)
        shares = weighted_shares(total, weights) if weights is not None else None

        participants = build_participants(expenses, roster, shares)
        plan = compute_settlement(participants)

        result = plan.as_dict()
        result["total"] = total
        result["balances"] = [
            {"id": p.id, "paid": p.paid, "owed": p.owed, "balance": p.balance} for p in participants
        ]
        return jsonify(result)


def main():
    configure_logging(default_settings.LOG_LEVEL)
    app = create_app()
    logger.info("Starting %s on %s:%d", default_settings.APP_NAME, default_settings.HOST, default_settings.PORT)
    app.run(host=default_settings.HOST, port=default_settings.PORT, debug=default_settings.DEBUG)


if __name__ == "__main__":
    main()
