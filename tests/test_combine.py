import pytest

from route_matching.calculation.combine import combined_similarity


def test_default_weights():
    assert combined_similarity(100, 100) == 100
    assert combined_similarity(0, 0) == 0
    assert combined_similarity(100, 0) == 60
    assert combined_similarity(0, 100) == 40


def test_custom_weights():
    assert combined_similarity(100, 0, {"mhd": 0.7, "order": 0.3}) == 70
    assert combined_similarity(0, 100, {"mhd": 0.7, "order": 0.3}) == 30
    assert combined_similarity(50, 50, {"mhd": 0.5, "order": 0.5}) == 50


@pytest.mark.parametrize("w1,w2", [(0.6, 0.4), (0.5, 0.25), (1.0, 1.0)])
def test_full_scores_scale_with_weight_sum(w1, w2):
    assert combined_similarity(100, 100, {"mhd": w1, "order": w2}) == round(100 * (w1 + w2))


def test_rounds_to_int():
    result = combined_similarity(33, 67)
    assert isinstance(result, int)
    assert result == 47


def test_halves_round_up():
    assert combined_similarity(51, 50, {"mhd": 0.5, "order": 0.5}) == 51
    assert combined_similarity(52, 51, {"mhd": 0.5, "order": 0.5}) == 52
    assert combined_similarity(1, 0, {"mhd": 0.5, "order": 0.5}) == 1
