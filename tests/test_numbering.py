"""Tests for NumberingValidator."""

from lexparse.hierarchy import Flattener, NumberingValidator, build_tree


def _issues(text: str) -> list[dict[str, str]]:
    return NumberingValidator.validate(Flattener.flatten(build_tree(text)))


class TestNumberingValidator:
    def test_sample_reports_shared_article_number(self, sample_data):
        issues = NumberingValidator.validate(sample_data)
        assert [(i["type"], i["level"]) for i in issues] == [("shared_number", "article")]
        assert "Article number 1" in issues[0]["message"]

    def test_clean_numbering(self):
        assert _issues("Статья 1. А\nСтатья 2. Б\nСтатья 3. В") == []

    def test_gap(self):
        issues = _issues("Глава 1. А\nГлава 2. Б\nГлава 5. В")
        assert len(issues) == 1
        assert issues[0]["type"] == "numbering_gap"
        assert "expected 3 after 2, found 5" in issues[0]["message"]

    def test_duplicate_in_scope(self):
        issues = _issues("Глава 1. А\nСтатья 1. Б\nСтатья 1. В")
        assert [i["type"] for i in issues] == ["duplicate_number"]
        assert "scope 0/0/1/0" in issues[0]["message"]

    def test_scopes_are_checked_separately(self):
        text = "\n".join([
            "Глава 1. А",
            "Статья 1. а",
            "Статья 2. б",
            "Глава 2. Б",
            "Статья 3. в",
        ])
        assert _issues(text) == []

    def test_empty_data(self):
        assert _issues("") == []
