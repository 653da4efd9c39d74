"""Unit tests for the listing change detector."""

import logging

from listingguard.diff.listing_diff import ChangeEntry, compute_listing_diff
from listingguard.moderation.field_moderation import MEDIA_REVIEW_REASON
from listingguard.moderation.screening import ModerationResult
from listingguard.schema import Tier


# =============================================================================
# BASIC DETECTION
# =============================================================================

class TestComputeListingDiff:
    """Tests for per-field change detection."""

    def test_title_change_is_tier_b_and_passes(self, screener):
        changes = compute_listing_diff({"title": "Old"}, {"title": "New"}, screener=screener)

        assert len(changes) == 1
        change = changes[0]
        assert change.field == "title"
        assert change.category is Tier.B
        assert change.old_value == "Old"
        assert change.new_value == "New"
        assert change.moderation_result.passed is True

    def test_category_change_is_tier_a(self, screener):
        changes = compute_listing_diff(
            {"category": "plumbing"}, {"category": "electrical"}, screener=screener
        )

        assert [(c.field, c.category) for c in changes] == [("category", Tier.A)]
        assert changes[0].moderation_result is None

    def test_company_name_in_description(self, screener):
        changes = compute_listing_diff(
            {"description": "Great service"},
            {"description": "Contact Acme Corp directly"},
            company_name="Acme Corp",
            screener=screener,
        )

        assert changes[0].moderation_result.reasons == ['Contains company name "Acme Corp"']
        assert changes[0].moderation_failed is True

    def test_media_change_always_gated(self, screener):
        changes = compute_listing_diff(
            {"media": ["a.jpg"]}, {"media": ["a.jpg", "b.jpg"]}, screener=screener
        )

        assert len(changes) == 1
        assert changes[0].moderation_result.passed is False
        assert changes[0].moderation_result.reasons == [MEDIA_REVIEW_REASON]

    def test_operational_change_has_no_moderation(self, screener):
        changes = compute_listing_diff(
            {"keywords": ["x"]}, {"keywords": ["x", "y"]}, screener=screener
        )

        assert len(changes) == 1
        assert changes[0].category is Tier.NONE
        assert changes[0].moderation_result is None

    def test_identical_snapshots(self, screener):
        listing = {"title": "T", "category": "c", "faq": [{"question": "Q", "answer": "A"}]}
        assert compute_listing_diff(listing, dict(listing), screener=screener) == []

    def test_internal_ids_only_is_no_change(self, screener):
        before = {"faq": [{"_id": "a1", "__v": 0, "question": "Q", "answer": "A"}]}
        after = {"faq": [{"_id": "b2", "__v": 4, "question": "Q", "answer": "A"}]}

        assert compute_listing_diff(before, after, screener=screener) == []

    def test_key_order_only_is_no_change(self, screener):
        before = {"subprojects": [{"name": "P", "price": 10}]}
        after = {"subprojects": [{"price": 10, "name": "P"}]}

        assert compute_listing_diff(before, after, screener=screener) == []

    def test_untracked_fields_ignored(self, screener):
        changes = compute_listing_diff(
            {"views": 1, "updatedAt": "x"}, {"views": 2, "updatedAt": "y"}, screener=screener
        )
        assert changes == []

    def test_added_and_removed_fields(self, screener):
        changes = compute_listing_diff(
            {"keywords": ["x"]}, {"title": "New"}, screener=screener
        )

        assert [(c.field, c.old_value, c.new_value) for c in changes] == [
            ("title", None, "New"),
            ("keywords", ["x"], None),
        ]

    def test_raw_values_preserved(self, screener):
        before = {"faq": [{"_id": "1", "question": "Q", "answer": "A"}]}
        after = {"faq": [{"_id": "1", "question": "Q2", "answer": "A"}]}

        change = compute_listing_diff(before, after, screener=screener)[0]

        assert change.old_value is before["faq"]
        assert change.new_value is after["faq"]

    def test_missing_to_nan_is_a_change(self, screener):
        changes = compute_listing_diff({}, {"distance": float("nan")}, screener=screener)

        assert [c.field for c in changes] == ["distance"]

    def test_non_mapping_snapshots_treated_as_empty(self, screener):
        assert compute_listing_diff(None, None, screener=screener) == []

        changes = compute_listing_diff(None, {"title": "T"}, screener=screener)
        assert [c.field for c in changes] == ["title"]


# =============================================================================
# ORDERING
# =============================================================================

class TestOrdering:
    """Output follows the tracked-field table."""

    def test_tier_order_independent_of_input_order(self, screener):
        before = {"keywords": ["a"], "title": "T", "category": "c"}
        after = {"keywords": ["b"], "title": "T2", "category": "d"}

        changes = compute_listing_diff(before, after, screener=screener)

        assert [c.field for c in changes] == ["category", "title", "keywords"]

    def test_all_fields_visited_after_tier_a_hit(self, screener):
        before = {"category": "c", "description": "ok"}
        after = {"category": "d", "description": "darn"}

        changes = compute_listing_diff(before, after, screener=screener)

        assert [c.field for c in changes] == ["category", "description"]
        assert changes[1].moderation_failed is True

    def test_deterministic(self, screener):
        before = {"title": "a", "faq": [], "distance": 5}
        after = {"title": "b", "faq": [{"question": "q"}], "distance": 6}

        first = compute_listing_diff(before, after, screener=screener)
        second = compute_listing_diff(before, after, screener=screener)

        assert first == second


# =============================================================================
# SERIALIZATION & LOGGING
# =============================================================================

class TestChangeEntry:
    """Tests for ChangeEntry serialization."""

    def test_to_dict_without_moderation(self):
        entry = ChangeEntry("keywords", Tier.NONE, ["x"], ["x", "y"])

        assert entry.to_dict() == {
            "field": "keywords",
            "category": "none",
            "oldValue": ["x"],
            "newValue": ["x", "y"],
        }

    def test_to_dict_with_moderation(self):
        entry = ChangeEntry("title", Tier.B, "a", "b", ModerationResult.from_reasons(["r"]))

        data = entry.to_dict()

        assert data["category"] == "B"
        assert data["moderationResult"] == {"passed": False, "reasons": ["r"]}

    def test_moderation_failed_false_without_result(self):
        assert ChangeEntry("category", Tier.A, "a", "b").moderation_failed is False


class TestDebugLogging:
    """Verbose logging never affects the result."""

    def test_debug_logs_changed_fields(self, screener, caplog):
        with caplog.at_level(logging.INFO, logger="listingguard.diff.listing_diff"):
            changes = compute_listing_diff(
                {"title": "Old"}, {"title": "New"}, screener=screener, debug=True
            )

        assert "Field 'title' changed | category: B" in caplog.text
        assert len(changes) == 1

    def test_quiet_when_disabled(self, screener, caplog):
        with caplog.at_level(logging.INFO, logger="listingguard.diff.listing_diff"):
            compute_listing_diff({"title": "Old"}, {"title": "New"}, screener=screener, debug=False)

        assert "changed" not in caplog.text

    def test_debug_does_not_change_result(self, screener):
        before = {"category": "c", "title": "x"}
        after = {"category": "d", "title": "darn"}

        loud = compute_listing_diff(before, after, screener=screener, debug=True)
        quiet = compute_listing_diff(before, after, screener=screener, debug=False)

        assert loud == quiet
