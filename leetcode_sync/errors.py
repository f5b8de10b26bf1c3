"""Exceptions raised while syncing LeetCode submissions to GitHub."""


class SyncError(Exception):
    """Base class for every failure that aborts a sync run."""


class ConfigError(SyncError):
    pass


class LeetCodeAPIError(SyncError):
    """LeetCode could not be reached or answered with something unusable."""


class UnsupportedLanguageError(SyncError):
    def __init__(self, lang, title=None):
        self.lang = lang
        self.title = title
        msg = f"Language {lang} does not have a registered extension."
        if title:
            msg += f" (problem: {title})"
        super().__init__(msg)
