"""Unit tests for the reapproval decision."""

from listingguard.diff.listing_diff import ChangeEntry
from listingguard.diff.reapproval import (
    ReapprovalResult,
    ReapprovalType,
    determine_reapproval_type,
    review_changes,
    summarize_changes,
)
from listingguard.moderation.screening import ModerationResult
from listingguard.schema import Tier


def _a(field="category"):
    return ChangeEntry(field, Tier.A, "old", "new")


def _b(field="title", reasons=()):
    return ChangeEntry(field, Tier.B, "old", "new", ModerationResult.from_reasons(reasons))


def _none(field="keywords"):
    return ChangeEntry(field, Tier.NONE, "old", "new")


# =============================================================================
# VERDICT
# =============================================================================

class TestDetermineReapprovalType:
    """Tests for the ordered decision rules."""

    def test_empty_is_none(self):
        assert determine_reapproval_type([]) is ReapprovalType.NONE

    def test_tier_a_is_full(self):
        assert determine_reapproval_type([_a()]) is ReapprovalType.FULL

    def test_tier_a_beats_failed_moderation(self):
        changes = [_b(reasons=["bad"]), _a()]
        assert determine_reapproval_type(changes) is ReapprovalType.FULL

    def test_failed_tier_b_is_moderation_failed(self):
        changes = [_b(), _b("description", ["bad"]), _none()]
        assert determine_reapproval_type(changes) is ReapprovalType.MODERATION_FAILED

    def test_passing_tier_b_and_operational_is_none(self):
        assert determine_reapproval_type([_b(), _none()]) is ReapprovalType.NONE

    def test_values_serialize_as_strings(self):
        assert ReapprovalType.FULL.value == "full"
        assert ReapprovalType.MODERATION_FAILED.value == "moderation_failed"
        assert ReapprovalType.NONE.value == "none"


# =============================================================================
# END TO END
# =============================================================================

class TestReviewChanges:
    """Diff plus verdict from raw snapshots."""

    def test_title_edit_needs_no_review(self, screener):
        result = review_changes({"title": "Old"}, {"title": "New"}, screener=screener)
        assert result.reapproval_type is ReapprovalType.NONE

    def test_category_edit_needs_full_review(self, screener):
        result = review_changes(
            {"category": "plumbing"}, {"category": "electrical"}, screener=screener
        )
        assert result.reapproval_type is ReapprovalType.FULL

    def test_company_name_leak_needs_moderation(self, screener):
        result = review_changes(
            {"description": "Great service"},
            {"description": "Contact Acme Corp directly"},
            company_name="Acme Corp",
            screener=screener,
        )

        assert result.reapproval_type is ReapprovalType.MODERATION_FAILED
        assert result.moderation_reasons() == ['Contains company name "Acme Corp"']

    def test_media_edit_needs_moderation(self, screener):
        result = review_changes(
            {"media": ["a.jpg"]}, {"media": ["a.jpg", "b.jpg"]}, screener=screener
        )
        assert result.reapproval_type is ReapprovalType.MODERATION_FAILED

    def test_operational_edit_needs_no_review(self, screener):
        result = review_changes({"keywords": ["x"]}, {"keywords": ["x", "y"]}, screener=screener)

        assert result.reapproval_type is ReapprovalType.NONE
        assert result.changes[0].category is Tier.NONE

    def test_to_dict(self, screener):
        result = review_changes({"title": "a"}, {"title": "darn"}, screener=screener)

        data = result.to_dict()

        assert data["reapprovalType"] == "moderation_failed"
        assert data["changes"][0]["field"] == "title"
        assert data["moderationReasons"] == ["Contains inappropriate language"]


class TestReapprovalResult:
    """Tests for result helpers."""

    def test_changes_by_category(self):
        result = ReapprovalResult(changes=[_a(), _b(), _none()])

        assert [c.field for c in result.changes_by_category(Tier.B)] == ["title"]

    def test_moderation_reasons_deduplicated(self):
        result = ReapprovalResult(changes=[
            _b("title", ["x", "y"]),
            _b("description", ["y", "z"]),
        ])

        assert result.moderation_reasons() == ["x", "y", "z"]

    def test_verdict_follows_change_list(self):
        result = ReapprovalResult(changes=[_b()])
        assert result.reapproval_type is ReapprovalType.NONE

        result.changes.append(_a())
        assert result.reapproval_type is ReapprovalType.FULL


class TestSummarizeChanges:
    """Tests for the summary helper."""

    def test_summary(self):
        summary = summarize_changes([_a(), _b("faq", ["bad"]), _none()])

        assert summary == {
            "reapprovalType": "full",
            "totalChanges": 3,
            "changesByCategory": {"A": 1, "B": 1, "none": 1},
            "changedFields": ["category", "faq", "keywords"],
            "failedModerationFields": ["faq"],
            "moderationReasons": ["bad"],
        }

    def test_empty_summary(self):
        summary = summarize_changes([])

        assert summary["reapprovalType"] == "none"
        assert summary["changesByCategory"] == {"A": 0, "B": 0, "none": 0}
