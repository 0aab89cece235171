"""
Newsletter Exceptions
=====================

Errors raised by the newsletter editor core. Drag cancellations and unset
settings are not errors and never raise.
"""


class NewsletterError(Exception):
    """Base class for newsletter editor errors"""


class UnknownBlockTypeError(NewsletterError, ValueError):
    """A block type outside the closed set reached the block factory"""

    def __init__(self, block_type):
        self.block_type = block_type
        super().__init__(f"Unknown block type: {block_type}")


class DocumentError(NewsletterError, ValueError):
    """A stored document could not be loaded (bad shape or duplicate ids)"""


class ActionError(NewsletterError, ValueError):
    """An editor action payload is malformed"""


class SettingsValueError(NewsletterError, ValueError):
    """A settings value has the wrong shape for its field"""


class SaveInProgressError(NewsletterError):
    """save() was triggered while a previous save is still in flight"""
