"""Filtering of raw LeetCode submission pages down to new, distinct accepted solves."""

import logging
from typing import Any, Dict, Iterable, List, Mapping

from leetcode_sync.models import Submission, record_timestamp
from leetcode_sync.naming import normalize_name

logger = logging.getLogger(__name__)

SubmissionIndex = Dict[str, Dict[str, int]]


def add_to_submissions(
    records: Iterable[Mapping[str, Any]],
    last_timestamp: int,
    filter_duplicate_secs: int,
    submissions_index: SubmissionIndex,
    submissions: List[Submission],
) -> bool:
    """
    Append the new accepted submissions of one page to ``submissions``.

    Records arrive newest-first, so the first record at or below
    ``last_timestamp`` ends the scan for this page and every later one.
    An accepted submission whose (name, lang) was already kept less than
    ``filter_duplicate_secs`` later is treated as a resubmission and dropped.

    Args:
        records: Raw entries of ``submissions_dump``
        last_timestamp: Watermark recovered from the last sync commit
        filter_duplicate_secs: Width of the duplicate-suppression window
        submissions_index: name -> lang -> timestamp of the kept submission
        submissions: Accumulator of kept submissions, newest-first

    Returns:
        False once the watermark is reached, True if the next page is needed
    """
    for record in records:
        if record_timestamp(record) <= last_timestamp:
            return False
        submission = Submission.from_api(record)
        if not submission.accepted:
            continue

        name = normalize_name(submission.title)
        by_lang = submissions_index.setdefault(name, {})
        kept = by_lang.get(submission.lang)
        if kept is not None and kept - submission.timestamp < filter_duplicate_secs:
            logger.debug(
                "Skipping submission %s, duplicate of %s (%s) at %d",
                submission.submission_id, submission.title, submission.lang, submission.timestamp,
            )
            continue

        by_lang[submission.lang] = submission.timestamp
        submissions.append(submission)
    return True
