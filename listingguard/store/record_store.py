"""
Record store contract for listing review.

The diff engine never touches storage. The review workflow goes through this
interface to load the two snapshots, record the change log and move the
listing between statuses.

Implement it with your actual database client (see PostgresRecordStore).
All writes for one review happen inside a single transaction.
"""

from typing import Any, Dict, List, Optional


class RecordStore:
    """
    Abstract record store interface.

    Listing ids are opaque strings. Snapshots are plain dictionaries.
    """

    def get_approved_snapshot(self, listing_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the last approved snapshot of a listing.

        Returns:
            Snapshot dictionary, or None if the listing was never approved

        Raises:
            ValueError: If the listing does not exist
        """
        raise NotImplementedError

    def get_current_state(self, listing_id: str) -> Dict[str, Any]:
        """
        Get the current (edited) state of a listing.

        Raises:
            ValueError: If the listing does not exist
        """
        raise NotImplementedError

    def save_change_log(
        self,
        listing_id: str,
        changes: List[Dict[str, Any]],
        reapproval_type: str
    ) -> str:
        """
        Persist one audit record for a review.

        Args:
            listing_id: Listing being reviewed
            changes: Serialized change entries (ChangeEntry.to_dict())
            reapproval_type: Verdict value ("full", "moderation_failed", "none")

        Returns:
            Id of the new change-log record
        """
        raise NotImplementedError

    def set_status(self, listing_id: str, status: str) -> None:
        """Set the publication status of a listing."""
        raise NotImplementedError

    def save_approved_snapshot(self, listing_id: str, snapshot: Dict[str, Any]) -> None:
        """Replace the approved snapshot of a listing."""
        raise NotImplementedError

    def begin_transaction(self) -> None:
        """Begin a transaction."""
        raise NotImplementedError

    def commit_transaction(self) -> None:
        """Commit the current transaction."""
        raise NotImplementedError

    def rollback_transaction(self) -> None:
        """Rollback the current transaction."""
        raise NotImplementedError
