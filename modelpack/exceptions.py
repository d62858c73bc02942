class ModelpackException(Exception):
    """
    Base class for all modelpack errors.
    Each custom exception should be derived from this class.
    """

    pass


class InvalidConfiguration(ModelpackException):
    pass


class WorkspaceReadError(ModelpackException, OSError):
    pass


class ModelConfigError(ModelpackException):
    pass


class BuildConfigError(ModelpackException):
    pass


class BuildError(ModelpackException):
    pass


class PipPackageParseError(ModelpackException):
    pass
