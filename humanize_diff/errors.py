"""Exception types raised (or recorded) by the humanization pipeline."""


class HumanizeError(Exception):
    """Base class for all humanize_diff errors."""


class InvalidInputError(HumanizeError, ValueError):
    """Input text is not a string or is blank."""


class DictionaryBuildError(HumanizeError, ValueError):
    """A rewrite rule could not be added to a dictionary.

    Never raised out of ``build_dictionary``; instances are collected on
    ``PhraseDictionary.rejected`` so callers can inspect what was skipped.
    """

    def __init__(self, message: str, rule=None):
        super().__init__(message)
        self.rule = rule


class CollaboratorFailure(HumanizeError):
    """The generative rewrite collaborator failed, timed out or returned junk."""


class BundleError(HumanizeError, ValueError):
    """A rule bundle file is malformed."""
