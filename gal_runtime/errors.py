"""Typed errors raised by the run-state engine.

Every failure the engine can report is a subclass of EngineError, so the
boundary adapters can catch the whole family in one place and map each class
to its own response. None of them leave the engine in a partially mutated
state.
"""


class EngineError(RuntimeError):
    """Base class for all engine failures."""


class NotLoaded(EngineError):
    """An operation was invoked before a project was loaded."""


class UnsupportedLocale(EngineError):
    """The loaded project has no script for the requested locale."""


class UnknownLocale(EngineError):
    """The locale is not in the project's locale catalog."""


class NoActiveRun(EngineError):
    """A run operation was invoked before start_new()."""


class InvalidSwitch(EngineError):
    """The requested switch cannot be taken at the current step."""


class AssetNotFound(EngineError):
    """An asset id has no backing resource."""


class InvalidRecord(EngineError):
    """A saved run does not fit the loaded project's script."""


class ProjectLoadError(EngineError):
    """The project directory or its project.json is malformed."""
