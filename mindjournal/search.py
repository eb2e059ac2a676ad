def _matches(entry, needle):
    if needle in str(entry.get("title") or "").lower():
        return True
    if needle in str(entry.get("content") or "").lower():
        return True
    return any(needle in str(tag).lower() for tag in entry.get("tags") or [])


def filter_entries(entries, query):
    """Entries whose title, content or a tag contains ``query`` (case-insensitive)."""
    needle = str(query or "").strip().lower()
    if not needle:
        return list(entries)
    return [entry for entry in entries if _matches(entry, needle)]


def filter_by_emotion(entries, minimum=None, maximum=None):
    selected = []
    for entry in entries:
        score = int(entry.get("emotion_score") or 0)
        if minimum is not None and score < minimum:
            continue
        if maximum is not None and score > maximum:
            continue
        selected.append(entry)
    return selected
