import pytest

from contact_intake.models.issue import Issue
from contact_intake.services.issue_resolver import parse_issue_areas, resolve_issue

from tests.fixtures.contact_fixtures import ISSUE_AREA_CASES


class TestParseIssueAreas:

    def test_mixed_separators(self):
        assert set(parse_issue_areas("Housing, Healthcare;\nEducation")) == {
            "Housing",
            "Healthcare",
            "Education",
        }

    @pytest.mark.parametrize("text,expected", ISSUE_AREA_CASES)
    def test_cases(self, text, expected):
        assert parse_issue_areas(text) == expected

    def test_none_is_empty(self):
        assert parse_issue_areas(None) == []


class TestResolveIssue:

    def test_creates_issue_with_default_category(self, db):
        issue_id = resolve_issue(db, "  Housing ")
        issue = db.get(Issue, issue_id)
        assert issue.name == "Housing"
        assert issue.category == "General"
        assert issue.description == ""
        assert issue.external_id is None

    def test_lookup_is_case_insensitive(self, db):
        first = resolve_issue(db, "Housing")
        assert resolve_issue(db, "HOUSING") == first
        assert db.query(Issue).count() == 1

    def test_lookup_is_exact(self, db):
        first = resolve_issue(db, "Housing")
        second = resolve_issue(db, "Affordable Housing")
        assert first != second

    def test_explicit_category(self, db):
        issue_id = resolve_issue(db, "Transit", category="Infrastructure")
        assert db.get(Issue, issue_id).category == "Infrastructure"

    def test_blank_name_is_rejected(self, db):
        with pytest.raises(ValueError):
            resolve_issue(db, "   ")
