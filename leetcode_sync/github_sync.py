"""
GitHub side of the sync: recover the last synced point from the commit log
and replay new submissions on top of it through the git data API.
"""

import logging
import time
from datetime import datetime, timezone

from github import GithubException, InputGitAuthor, InputGitTreeElement, RateLimitExceededException

from leetcode_sync.errors import SyncError
from leetcode_sync.models import AuthorIdentity, CommitChainState, SyncStart
from leetcode_sync.naming import COMMIT_MESSAGE, commit_message, normalize_name, solution_path

logger = logging.getLogger(__name__)

COMMIT_SCAN_LIMIT = 100
DEFAULT_RATE_LIMIT_WAIT = 60


def _header(headers, name):
    for key, value in (headers or {}).items():
        if key.lower() == name.lower():
            return value
    return None


def is_abuse_limit(e):
    message = ""
    if isinstance(e.data, dict):
        message = str(e.data.get("message", ""))
    message = message.lower()
    return "secondary rate limit" in message or "abuse" in message


def rate_limit_wait(e, now=None):
    """Seconds GitHub asked us to wait before retrying, from Retry-After or X-RateLimit-Reset."""
    retry_after = _header(e.headers, "Retry-After")
    if retry_after is not None:
        return max(int(retry_after), 0)
    reset = _header(e.headers, "X-RateLimit-Reset")
    if reset is not None:
        now = time.time() if now is None else now
        return max(int(reset) - int(now), 0)
    return DEFAULT_RATE_LIMIT_WAIT


class GitHubRepository:
    """
    The handful of repository calls the sync needs, each one rate-limit aware.

    A primary rate limit is retried exactly once after the wait GitHub asks
    for. A secondary (abuse) limit is never retried, only reported.
    """

    def __init__(self, repo, branch=None, sleep=time.sleep):
        self.repo = repo
        self.branch = branch or repo.default_branch
        self._sleep = sleep

    @property
    def full_name(self):
        return self.repo.full_name

    def _call(self, description, func, *args, **kwargs):
        retried = False
        while True:
            try:
                return func(*args, **kwargs)
            except RateLimitExceededException as e:
                if is_abuse_limit(e):
                    logger.warning("Abuse detected for request %s", description)
                    raise
                logger.warning("Request quota exhausted for request %s", description)
                if retried:
                    raise
                wait = rate_limit_wait(e)
                logger.info("Retrying after %d seconds!", wait)
                self._sleep(wait)
                retried = True

    def recent_commits(self, limit=COMMIT_SCAN_LIMIT):
        """Most recent commits on the branch, newest first."""
        return self._call(
            f"GET /repos/{self.full_name}/commits",
            lambda: list(self.repo.get_commits(sha=self.branch)[:limit]),
        )

    def create_tree(self, elements, base_tree):
        return self._call(
            f"POST /repos/{self.full_name}/git/trees",
            self.repo.create_git_tree, elements, base_tree,
        )

    def create_commit(self, message, tree, parents, author, committer):
        return self._call(
            f"POST /repos/{self.full_name}/git/commits",
            self.repo.create_git_commit, message, tree, parents, author=author, committer=committer,
        )

    def update_ref(self, sha):
        ref = self._call(
            f"GET /repos/{self.full_name}/git/ref/heads/{self.branch}",
            self.repo.get_git_ref, f"heads/{self.branch}",
        )
        self._call(
            f"PATCH /repos/{self.full_name}/git/refs/heads/{self.branch}",
            ref.edit, sha, force=True,
        )


def _epoch(date):
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return int(date.timestamp())


def resolve_watermark(repo):
    """
    Find where the previous run stopped.

    The newest commit whose message starts with COMMIT_MESSAGE supplies the
    watermark (its committer date) and the author to reuse. Without one,
    everything is synced and the oldest scanned commit's author is used.
    """
    try:
        commits = repo.recent_commits()
    except GithubException as e:
        if e.status == 409:
            raise SyncError(f"Repository {repo.full_name} has no commits to build on") from e
        raise
    if not commits:
        raise SyncError(f"Repository {repo.full_name} has no commits to build on")

    last_timestamp = 0
    author = commits[-1].commit.author
    for c in commits:
        if not c.commit.message.startswith(COMMIT_MESSAGE):
            continue
        author = c.commit.author
        last_timestamp = _epoch(c.commit.committer.date)
        break

    if last_timestamp:
        logger.info("Last sync commit found, syncing submissions after %d", last_timestamp)
    else:
        logger.info("No previous sync commit in the last %d commits, syncing everything", len(commits))

    tip = commits[0].commit
    return SyncStart(
        last_timestamp=last_timestamp,
        author=AuthorIdentity(name=author.name, email=author.email),
        chain=CommitChainState(tree=tip.tree, commit=tip),
    )


def commit_date(timestamp):
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def commit_submission(repo, author, state, submission):
    """Add one submission as a single-file commit on top of ``state`` and move the branch to it."""
    # Resolved before any API call so an unmapped language never leaves a half-made commit.
    path = solution_path(submission)
    logger.info("Committing solution for %s...", normalize_name(submission.title))

    element = InputGitTreeElement(path, "100644", "blob", content=submission.code)
    tree = repo.create_tree([element], state.tree)

    date = commit_date(submission.timestamp)
    identity = InputGitAuthor(author.name, author.email, date)
    commit = repo.create_commit(commit_message(submission), tree, [state.commit], identity, identity)

    repo.update_ref(commit.sha)
    logger.info("Committed solution for %s", normalize_name(submission.title))
    return CommitChainState(tree=tree, commit=commit)


def replay(repo, submissions, start, author):
    """Commit ``submissions`` oldest-first, each on top of the previous one."""
    state = start
    for submission in submissions:
        state = commit_submission(repo, author, state, submission)
    return state
