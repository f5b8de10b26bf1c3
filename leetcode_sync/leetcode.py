import logging
import time

import requests

from leetcode_sync.dedup import add_to_submissions
from leetcode_sync.errors import LeetCodeAPIError

logger = logging.getLogger(__name__)

BASE_URL = "https://leetcode.com"
SUBMISSIONS_URL = f"{BASE_URL}/api/submissions/"
PAGE_SIZE = 20


def leetcode_headers(session, csrf):
    return {
        "X-Requested-With": "XMLHttpRequest",
        "X-CSRFToken": csrf,
        "Cookie": f"csrftoken={csrf};LEETCODE_SESSION={session};",
        "Referer": BASE_URL,
    }


class LeetCodeClient:
    """Pages through the signed-in user's submissions, newest first."""

    def __init__(self, csrf_token, session_token, request_delay=1.0, max_retries=5,
                 timeout=30, http=None, sleep=time.sleep):
        self.request_delay = request_delay
        self.max_retries = max_retries
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update(leetcode_headers(session_token, csrf_token))
        self._sleep = sleep

    def get_submissions(self, offset, last_key="", max_retries=0):
        """Fetch one page, retrying with a 3**n second backoff on failure."""
        params = {"offset": offset, "limit": PAGE_SIZE, "lastkey": last_key}
        retry_count = 0
        while True:
            try:
                resp = self.http.get(SUBMISSIONS_URL, params=params, timeout=self.timeout)
                resp.raise_for_status()
                break
            except requests.RequestException as e:
                if retry_count >= max_retries:
                    logger.error("Failed fetching submissions at offset %d: %s", offset, e)
                    raise LeetCodeAPIError(f"Failed fetching submissions at offset {offset}: {e}") from e
                # LeetCode rate limits this endpoint, so back off before retrying.
                wait = 3 ** retry_count
                logger.warning("Error fetching submissions, retrying in %d seconds... (%s)", wait, e)
                self._sleep(wait)
                retry_count += 1

        try:
            data = resp.json()
        except ValueError as e:
            raise LeetCodeAPIError(
                "LeetCode returned non-JSON; LEETCODE_SESSION or LEETCODE_CSRF_TOKEN is likely expired."
            ) from e
        if not isinstance(data, dict) or "submissions_dump" not in data:
            raise LeetCodeAPIError(f"LeetCode response has no submissions_dump at offset {offset}")
        return data

    def fetch_submissions(self, last_timestamp, filter_duplicate_secs):
        """
        Collect every accepted, non-duplicate submission newer than ``last_timestamp``.

        The first request is made without retries so that bad credentials fail
        fast; later requests are spaced by ``request_delay`` and retried up to
        ``max_retries`` times. The returned list is newest-first.
        """
        submissions = []
        submissions_index = {}
        offset = 0
        data = None
        while True:
            if data is None:
                max_retries = 0
                last_key = ""
            else:
                max_retries = self.max_retries
                last_key = data.get("last_key") or ""
                self._sleep(self.request_delay)

            logger.info("Getting submission from LeetCode, offset %d", offset)
            data = self.get_submissions(offset, last_key, max_retries)
            more = add_to_submissions(
                data["submissions_dump"], last_timestamp, filter_duplicate_secs,
                submissions_index, submissions,
            )
            if not more or not data.get("has_next"):
                break
            offset += PAGE_SIZE

        logger.info("Total accepted submissions found: %d", len(submissions))
        return submissions
