"""
Pytest fixtures and configuration for quote_intake tests.
Provides detection payload builders and resets process-wide caches.
"""

import pytest

from quote_intake.checker import CompletenessChecker
from quote_intake.config.checker import CONFIG_ENV_VAR, reset_checker_config_cache
from quote_intake.startup import reset_startup_state

from quote_test_helpers import make_service


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Every test starts without a cached config or a configured path."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_checker_config_cache()
    reset_startup_state()
    yield
    reset_checker_config_cache()
    reset_startup_state()


@pytest.fixture
def checker():
    """Checker with the built-in defaults."""
    return CompletenessChecker()


@pytest.fixture
def mulch_service():
    """A complete mulch line item."""
    return make_service()


@pytest.fixture
def detection_payload():
    """Detector output in its camelCase wire shape."""
    return {
        "services": [
            {
                "name": "Triple Ground Mulch",
                "quantity": 100,
                "unit": "sqft",
                "confidence": 0.95,
                "originalText": "100 sqft of triple ground mulch",
            },
            {
                "name": "Metal Edging",
                "quantity": 50,
                "unit": "linear_feet",
                "confidence": 0.9,
                "originalText": "50 feet of metal edging",
            },
        ],
        "unmappedText": [],
        "inputAnalysis": {
            "overallConfidence": 0.92,
            "hasMultipleServices": True,
            "hasQuantities": True,
            "hasUnits": True,
        },
    }
