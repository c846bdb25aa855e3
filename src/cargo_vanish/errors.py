"""Exceptions raised by cargo-vanish."""


class VanishError(Exception):
    """Base class for all cargo-vanish errors."""


class InvalidRootError(VanishError):
    """The scan root does not exist, is not a directory or cannot be accessed."""


class PatternError(VanishError):
    """The filter pattern is not a valid regular expression."""


class ProjectError(VanishError):
    """A project could not be built from its manifest."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class InvalidManifestError(ProjectError):
    pass


class ManifestReadError(ProjectError):
    pass


class ManifestParseError(ProjectError):
    pass


class NameResolutionError(ProjectError):
    pass


class ArtifactAccessError(ProjectError):
    pass
