from app.shared.matching import best_name_match, similarity


def test_similarity_is_case_insensitive():
    assert similarity("Anna", "anna") == 1.0


def test_best_name_match_uses_first_name():
    names = ["Anna de Vries", "Bram Jansen"]
    assert best_name_match("Ana", names, lambda n: n) == "Anna de Vries"


def test_best_name_match_below_threshold():
    assert best_name_match("Zyxwv", ["Anna de Vries"], lambda n: n) is None
