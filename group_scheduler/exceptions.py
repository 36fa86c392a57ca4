"""Custom exceptions for the Group Scheduler CLI."""


class GroupSchedulerError(Exception):
    """Base exception for all group scheduler errors."""
    pass


class ConfigError(GroupSchedulerError):
    """Raised when there's an issue with configuration."""
    pass


class EventFileError(GroupSchedulerError):
    """Raised when an event file cannot be read, parsed or written."""
    pass


class ParticipantNotFoundError(GroupSchedulerError):
    """Raised when a participant lookup by id or name fails."""
    pass


class TemplateError(GroupSchedulerError):
    """Raised when there's an issue with template rendering."""
    pass
