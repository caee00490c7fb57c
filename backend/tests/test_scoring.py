from wrdhntr.services.games.scoring import exclusive_score, free_for_all_score


def test_free_for_all_short_word():
    # 4 letters, 50 seconds of time bonus
    assert free_for_all_score('HUND', 10) == 200


def test_free_for_all_long_word_bonus():
    assert free_for_all_score('TESTORD', 0) == 7 * 60 + 5


def test_free_for_all_six_letters_gets_no_bonus():
    assert free_for_all_score('HUNDAR', 0) == 6 * 60


def test_free_for_all_after_a_minute_only_long_bonus_left():
    assert free_for_all_score('HUND', 60) == 0
    assert free_for_all_score('HUND', 75) == 0
    assert free_for_all_score('TESTORD', 90) == 5


def test_free_for_all_prefers_early_and_long():
    assert free_for_all_score('HUND', 5) > free_for_all_score('HUND', 6)
    assert free_for_all_score('HUNDAR', 20) > free_for_all_score('HUND', 20)


def test_free_for_all_rounds_halves_up():
    assert free_for_all_score('ORD', 59.5) == 2  # 1.5 -> 2


def test_exclusive_is_one_point_per_letter():
    assert exclusive_score('KATT') == 4
    assert exclusive_score('TESTORD') == 7
