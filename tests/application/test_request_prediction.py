import random

import pytest
from conftest import InMemoryCredits, InMemoryPredictionStore

from src.application.use_cases.get_credits import GetCreditsUseCase
from src.application.use_cases.request_prediction import RequestPredictionUseCase
from src.domain.exceptions import CreditsConflict, InsufficientCredits, InvalidArgument


@pytest.fixture
def use_case(credits, prediction_store, synthetic):
    return RequestPredictionUseCase(credits, prediction_store, synthetic, rng_factory=lambda: random.Random(7))


def test_spends_one_credit_and_records_prediction(use_case, credits, prediction_store):
    result = use_case.execute("user-1", "aapl")

    assert result.credits.credits_remaining == 2
    assert credits.balances["user-1"] == 2
    assert prediction_store.saved == [("user-1", result.prediction)]
    prediction = result.prediction
    assert prediction.symbol == "AAPL"
    assert prediction.direction in ("up", "down")
    assert 70 <= prediction.confidence <= 99
    assert prediction.timeframe == "1-2 weeks"


def test_target_moves_in_predicted_direction(use_case, synthetic):
    price = synthetic.quote("AAPL", 30).price
    prediction = use_case.execute("user-1", "AAPL").prediction
    if prediction.direction == "up":
        assert prediction.target > price
    else:
        assert prediction.target < price


def test_zero_balance_is_rejected(use_case, credits, prediction_store):
    with pytest.raises(InsufficientCredits):
        use_case.execute("broke", "AAPL")
    assert credits.balances["broke"] == 0
    assert prediction_store.saved == []


def test_user_without_credits_row_is_rejected(use_case):
    with pytest.raises(InsufficientCredits):
        use_case.execute("stranger", "AAPL")


def test_concurrent_spend_is_detected(synthetic, prediction_store):
    credits = InMemoryCredits({"user-1": 1}, steal_on_write=True)
    use_case = RequestPredictionUseCase(credits, prediction_store, synthetic)
    with pytest.raises(CreditsConflict):
        use_case.execute("user-1", "AAPL")
    assert prediction_store.saved == []


def test_failed_insert_still_returns_prediction(credits, synthetic):
    use_case = RequestPredictionUseCase(credits, InMemoryPredictionStore(fail=True), synthetic)
    result = use_case.execute("user-1", "AAPL")
    assert result.credits.credits_remaining == 2


def test_blank_symbol(use_case, credits):
    with pytest.raises(InvalidArgument):
        use_case.execute("user-1", " ")
    assert credits.balances["user-1"] == 3


def test_get_credits(credits):
    assert GetCreditsUseCase(credits).execute("user-1").credits_remaining == 3
    missing = GetCreditsUseCase(credits).execute("stranger")
    assert (missing.credits_remaining, missing.plan_type) == (0, "free")


def test_target_uses_configured_history_window(credits, prediction_store, synthetic):
    use_case = RequestPredictionUseCase(
        credits, prediction_store, synthetic, rng_factory=lambda: random.Random(7), history_days=60
    )
    price = synthetic.quote("AAPL", 60).price

    prediction = use_case.execute("user-1", "AAPL").prediction

    expected = price * (1.05 if prediction.direction == "up" else 0.95)
    assert prediction.target == round(expected, 2)
