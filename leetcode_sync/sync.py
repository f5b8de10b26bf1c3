import logging
import sys

from github import Auth, Github

from leetcode_sync.config import SyncConfig
from leetcode_sync.github_sync import GitHubRepository, replay, resolve_watermark
from leetcode_sync.leetcode import LeetCodeClient

logger = logging.getLogger(__name__)

USER_AGENT = "LeetCode sync to GitHub"


def configure_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def github_repository(config):
    # PyGithub's own retry is off; GitHubRepository decides what gets retried.
    g = Github(auth=Auth.Token(config.github_token), user_agent=USER_AGENT, per_page=100, retry=None)
    return GitHubRepository(g.get_repo(config.repository), branch=config.branch)


def sync(config, github_repo=None, leetcode=None):
    """
    Run one sync: recover the watermark, fetch newer accepted submissions
    and commit them oldest-first. Returns the number of commits made.
    """
    repo = github_repo or github_repository(config)
    leetcode = leetcode or LeetCodeClient(
        config.leetcode_csrf_token,
        config.leetcode_session,
        request_delay=config.request_delay,
        max_retries=config.max_retries,
    )

    start = resolve_watermark(repo)
    submissions = leetcode.fetch_submissions(start.last_timestamp, config.filter_duplicate_secs)

    # Oldest first, so that after a failure the last sync commit is still a valid watermark.
    submissions.reverse()
    logger.info("Syncing %d submissions...", len(submissions))
    for submission in submissions:
        logger.info("  %s (%s)", submission.title, submission.lang)

    replay(repo, submissions, start.chain, start.author)
    logger.info("Done syncing all submissions.")
    return len(submissions)


def main(env_path=None):
    config = SyncConfig.from_env(env_path)
    configure_logging(config.log_level)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    try:
        count = sync(config)
    except Exception:
        logger.exception("Sync failed")
        return 1
    logger.info("Synced %d submissions to %s", count, config.repository)
    return 0


def run():
    sys.exit(main())
