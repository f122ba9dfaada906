import logging
import os

from flask import Flask, jsonify, redirect, render_template, request, session, url_for

from installment_calc.engine import MAX_MONTHS, compute
from installment_calc.errors import DegenerateInputError, FieldFormatError
from installment_calc.form import FormState, apply_edit, apply_edits, submit
from installment_calc.utils import FIELD_LABELS, validate_field

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["MAX_MONTHS"] = int(os.environ.get("INSTALLMENT_MAX_MONTHS", MAX_MONTHS))
app.config["LOG_LEVEL"] = os.environ.get("INSTALLMENT_LOG_LEVEL", "INFO").upper()
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")

logger = logging.getLogger(__name__)

SESSION_KEY = "form"


def _load_state() -> FormState:
    """Rebuild the form state kept in the session.

    Only the field texts are stored; the result is recomputed because the
    calculation is deterministic.
    """
    stored = session.get(SESSION_KEY) or {}
    fields = stored.get("fields") or {}
    state = FormState(**{k: v for k, v in fields.items() if k in FIELD_LABELS})
    if stored.get("calculated"):
        state = submit(state, app.config["MAX_MONTHS"])
    return state


def _save_state(state: FormState) -> None:
    session[SESSION_KEY] = {
        "fields": state.field_values(),
        "calculated": state.result is not None,
    }


def _form_edits(form) -> dict:
    return {name: form[name] for name in FIELD_LABELS if name in form}


@app.route("/", methods=["GET", "POST"])
def index():
    state = _load_state()

    if request.method == "POST":
        state = apply_edits(state, _form_edits(request.form))
        if not state.error:
            state = submit(state, app.config["MAX_MONTHS"])
        _save_state(state)

    return render_template(
        "index.html",
        state=state,
        result=state.result,
        error=state.error,
        field_labels=FIELD_LABELS,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/reset")
def reset():
    session.pop(SESSION_KEY, None)
    return redirect(url_for("index"))


@app.post("/api/validate")
def api_validate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    field = payload.get("field")
    value = payload.get("value", "")
    if not isinstance(field, str) or field not in FIELD_LABELS or not isinstance(value, str):
        return jsonify({"error": "Expected a known 'field' and a string 'value'"}), 400
    state = apply_edit(FormState(), field, value)
    return jsonify({"valid": not state.error, "error": state.error})


@app.post("/api/calculate")
def api_calculate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    values = {}
    try:
        for name in FIELD_LABELS:
            value = payload.get(name, "")
            if isinstance(value, str):
                validate_field(name, value)
            values[name] = value
        result = compute(
            values["original_price"],
            values["monthly_payment"],
            values["months"],
            max_months=app.config["MAX_MONTHS"],
        )
    except FieldFormatError as exc:
        return jsonify({"error": str(exc), "field": exc.field}), 400
    except DegenerateInputError as exc:
        logger.warning("Rejected calculation request: %s", exc)
        return jsonify({"error": str(exc)}), 400
    return jsonify(result.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=app.config["LOG_LEVEL"])
    logger.info("Starting installment calculator web app")
    app.run(host="0.0.0.0", port=8710, debug=True)
