from mindjournal.search import filter_by_emotion, filter_entries

ENTRIES = [
    {"title": "Morning Run", "content": "Felt strong today.", "tags": ["sport"], "emotion_score": 8},
    {"title": "Work", "content": "Long meeting about the RUNWAY project.", "tags": [], "emotion_score": 4},
    {"title": "Family dinner", "content": "Cooked curry together.", "tags": ["family", "Food"], "emotion_score": 9},
]


def test_empty_query_returns_everything():
    assert filter_entries(ENTRIES, "") == ENTRIES
    assert filter_entries(ENTRIES, "   ") == ENTRIES


def test_matches_title_content_and_tags_case_insensitively():
    assert [entry["title"] for entry in filter_entries(ENTRIES, "run")] == ["Morning Run", "Work"]
    assert [entry["title"] for entry in filter_entries(ENTRIES, "food")] == ["Family dinner"]
    assert filter_entries(ENTRIES, "nothing here") == []


def test_filter_by_emotion_range():
    assert [entry["title"] for entry in filter_by_emotion(ENTRIES, minimum=8)] == ["Morning Run", "Family dinner"]
    assert [entry["title"] for entry in filter_by_emotion(ENTRIES, maximum=5)] == ["Work"]
