import sys

from leetcode_sync.sync import main

# ---------------- MAIN ----------------
# Reads GITHUB_TOKEN, GITHUB_REPO (or GITHUB_REPOSITORY), LEETCODE_SESSION,
# LEETCODE_CSRF_TOKEN and FILTER_DUPLICATE_SECS from the environment or .env.
if __name__ == "__main__":
    sys.exit(main())
