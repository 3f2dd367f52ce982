"""
app/services/batch_committer.py

Sequential, bounded-size persistence of canonical records.

Each batch is one atomic store write. Batches are independent: when batch k
fails, batches 1..k-1 stay committed and nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from app.domain.errors import CommitError
from app.repositories.document_store import DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


def iter_batches(
    records: Sequence[Mapping[str, Any]],
    batch_size: int,
) -> Iterator[Sequence[Mapping[str, Any]]]:
    """
    Yield consecutive slices of at most ``batch_size`` records.
    """

    size = max(1, batch_size)
    for start in range(0, len(records), size):
        yield records[start : start + size]


class BatchCommitter:
    """
    Writes records to a collection one batch at a time.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def commit(
        self,
        records: Sequence[Mapping[str, Any]],
        collection_id: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> int:
        """
        Persist ``records`` and return how many were committed.

        Raises:
            CommitError: when a batch write fails; ``committed_count`` holds
                the number of records from earlier, successful batches.
        """

        success_count = 0
        for batch_index, batch in enumerate(iter_batches(records, batch_size)):
            try:
                self._store.batch_write(collection_id, batch)
            except DocumentStoreError as exc:
                logger.error(
                    "Batch commit failed collection=%s batch=%d size=%d committed=%d: %s",
                    collection_id,
                    batch_index,
                    len(batch),
                    success_count,
                    exc,
                )
                raise CommitError(
                    f"Batch {batch_index + 1} failed after {success_count} records were committed: {exc}",
                    committed_count=success_count,
                    batch_index=batch_index,
                ) from exc

            success_count += len(batch)
            logger.info(
                "Committed batch collection=%s batch=%d size=%d total=%d",
                collection_id,
                batch_index,
                len(batch),
                success_count,
            )
        return success_count
