from route_matching.calculation.distance_methods import round_half_up

DEFAULT_WEIGHTS = {"mhd": 0.6, "order": 0.4}


def combined_similarity(mhd_similarity, order_similarity, weights=None):
    """
    Weighted blend of the set similarity and the order similarity.
    Weights are not validated and need not sum to 1.

    :param mhd_similarity: 0-100
    :param order_similarity: 0-100
    :param weights: {"mhd": w1, "order": w2}, defaults to 0.6 / 0.4
    :return: similarity 0-100 for sane weights
    """
    if weights is None:
        weights = DEFAULT_WEIGHTS

    return round_half_up(
        weights["mhd"] * mhd_similarity +
        weights["order"] * order_similarity
    )
