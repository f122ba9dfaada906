"""Shared fixtures.

Canonical case: $1,000 item paid off with $100 a month over 12 months,
i.e. $200 of interest spread evenly at $16.67 a month.
"""

import pytest

from installment_calc.engine import compute
from installment_calc_web.app import app as flask_app


@pytest.fixture
def canonical_result():
    return compute("1000", "100", "12")


@pytest.fixture
def app():
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
