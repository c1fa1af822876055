"""Exception hierarchy for the path tracer.

Intersection and sampling queries never raise: absence is reported with
``None`` and depth exhaustion yields black. Exceptions are reserved for
misuse of the scene lifecycle and invalid construction arguments.
"""


class PathTraceError(Exception):
    """Base class for all path tracer errors."""


class SceneError(PathTraceError):
    """A scene could not be built or used as requested."""


class SceneNotCompiledError(SceneError):
    """A compiled scene was requested before compile() was called."""


class NoLightsError(SceneError):
    """Compilation was rejected because the scene has no lights."""
