"""Plain data passed between the fetch, dedup and commit stages."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from leetcode_sync.errors import LeetCodeAPIError

ACCEPTED = "Accepted"


def record_timestamp(record: Mapping[str, Any]) -> int:
    """Epoch seconds of one ``submissions_dump`` entry."""
    try:
        return int(record["timestamp"])
    except (KeyError, TypeError, ValueError) as e:
        raise LeetCodeAPIError(f"Submission record has no usable timestamp: {record!r}") from e


@dataclass(frozen=True)
class Submission:
    title: str
    lang: str
    code: str
    timestamp: int
    status: str
    submission_id: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.status == ACCEPTED

    @classmethod
    def from_api(cls, record: Mapping[str, Any]) -> "Submission":
        """Build a Submission from one entry of LeetCode's ``submissions_dump``."""
        try:
            submission = cls(
                title=record["title"],
                lang=record["lang"],
                code=record["code"],
                timestamp=record_timestamp(record),
                status=record["status_display"],
                submission_id=record.get("id"),
            )
        except KeyError as e:
            raise LeetCodeAPIError(f"Malformed submission record: {record!r}") from e
        # A null code is as malformed as a missing one.
        if not isinstance(submission.code, str):
            raise LeetCodeAPIError(f"Submission record has no source code: {record!r}")
        return submission


@dataclass(frozen=True)
class AuthorIdentity:
    name: str
    email: str


@dataclass(frozen=True)
class CommitChainState:
    """Tip of the commit chain being built: the last tree and the commit that holds it."""

    tree: Any
    commit: Any

    @property
    def tree_sha(self) -> str:
        return self.tree.sha

    @property
    def commit_sha(self) -> str:
        return self.commit.sha


@dataclass(frozen=True)
class SyncStart:
    last_timestamp: int
    author: AuthorIdentity
    chain: CommitChainState
