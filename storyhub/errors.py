# storyhub/errors.py


class StoryHubError(Exception):
    """Base class for all errors raised by the data-access layer"""


class NotFound(StoryHubError, LookupError):
    """A record looked up by id does not exist"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class DuplicateKey(StoryHubError, ValueError):
    """A unique key (username, email, external id, chapter number) is already taken"""


class ValidationFailed(StoryHubError, ValueError):
    """Malformed input or a reference to a row that does not exist"""


class TranslationUnavailable(StoryHubError):
    """The external translator is not configured, unreachable or returned garbage"""


class StoreUnavailable(StoryHubError):
    """The relational store could not be reached"""
