"""Fakes for the LeetCode endpoint and the PyGithub repository."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
import requests

from leetcode_sync.config import SyncConfig


def record(title, timestamp, lang="python3", status="Accepted", code="pass"):
    """One entry of LeetCode's ``submissions_dump``."""
    return {
        "id": timestamp,
        "title": title,
        "lang": lang,
        "code": code,
        "timestamp": timestamp,
        "status_display": status,
    }


def page(records, has_next=False, last_key="key"):
    return {"submissions_dump": records, "has_next": has_next, "last_key": last_key}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeHttp:
    """
    Stands in for requests.Session. Each GET consumes the next outcome:
    a page dict, a FakeResponse, or an exception to raise.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.headers = {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append(dict(params or {}))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, FakeResponse):
            return outcome
        return FakeResponse(outcome)


def _git_commit(sha, message, name, email, date, tree_sha):
    return SimpleNamespace(
        sha=sha,
        message=message,
        author=SimpleNamespace(name=name, email=email, date=date),
        committer=SimpleNamespace(name=name, email=email, date=date),
        tree=SimpleNamespace(sha=tree_sha),
    )


class FakeRef:
    def __init__(self, repo):
        self.repo = repo

    def edit(self, sha, force=False):
        self.repo.ref_updates.append((sha, force))
        self.repo.history.insert(0, SimpleNamespace(sha=sha, commit=self.repo.git_commits[sha]))


class FakeGithubRepo:
    """
    Just enough of github.Repository.Repository for the sync: a commit log
    (newest first), tree and commit creation, and a branch ref that moves.
    """

    full_name = "octocat/leetcode"
    default_branch = "main"

    def __init__(self, history=None):
        self.history = list(history) if history is not None else [
            self.make_commit("Initial commit", datetime(2020, 1, 1, tzinfo=timezone.utc)),
        ]
        self.git_commits = {c.sha: c.commit for c in self.history}
        self.trees = []
        self.created_commits = []
        self.ref_updates = []
        self.failures = {}

    @staticmethod
    def make_commit(message, date, name="Octo Cat", email="octo@example.com", sha=None):
        sha = sha or f"sha-{message}-{int(date.timestamp())}"
        return SimpleNamespace(sha=sha, commit=_git_commit(sha, message, name, email, date, f"tree-{sha}"))

    def _maybe_fail(self, name):
        errors = self.failures.get(name)
        if errors:
            raise errors.pop(0)

    def get_commits(self, sha=None):
        self._maybe_fail("get_commits")
        return list(self.history)

    def create_git_tree(self, tree, base_tree=None):
        self._maybe_fail("create_git_tree")
        sha = f"tree-{len(self.trees) + 1}"
        self.trees.append({"sha": sha, "base": base_tree.sha, "elements": [e._identity for e in tree]})
        return SimpleNamespace(sha=sha)

    def create_git_commit(self, message, tree, parents, author=None, committer=None):
        self._maybe_fail("create_git_commit")
        sha = f"commit-{len(self.created_commits) + 1}"
        identity = author._identity
        date = datetime.strptime(identity["date"], "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
        commit = _git_commit(sha, message, identity["name"], identity["email"], date, tree.sha)
        self.git_commits[sha] = commit
        self.created_commits.append({
            "sha": sha,
            "message": message,
            "tree": tree.sha,
            "parents": [p.sha for p in parents],
            "author": identity,
            "committer": committer._identity,
        })
        return commit

    def get_git_ref(self, ref):
        self._maybe_fail("get_git_ref")
        assert ref == f"heads/{self.default_branch}"
        return FakeRef(self)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_repo():
    return FakeGithubRepo()


@pytest.fixture
def config():
    return SyncConfig(
        github_token="ghp_test",
        repository="octocat/leetcode",
        leetcode_csrf_token="csrf",
        leetcode_session="session",
        filter_duplicate_secs=3600,
    )
