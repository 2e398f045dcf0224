"""Provisioner specific exceptions.

Callers tell failures apart through the `retryable` and `ignorable` flags:

- ignorable errors mean the volume is not ours: do not retry and do not alarm.
- retryable errors come from the backend or the local filesystem: the caller
  schedules a new attempt.
- anything else (policy violations, configuration errors) is permanent.
"""


class ProvisionerError(Exception):
    """Base class of the errors raised by the provisioner."""

    retryable = False
    ignorable = False

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(ProvisionerError):
    """Exception raised when the configuration is missing or invalid.

    The process must not start.
    """


class PolicyViolationError(ProvisionerError):
    """The request conflicts with the provisioner policy."""


class QuotaSizeRequiredError(PolicyViolationError):
    """Quotas are enabled but the request does not define a size."""

    def __init__(self, volume: str, *args):
        self.volume = volume
        super().__init__(
            f"No storage size requested for volume {volume} and quotas enabled", *args
        )


class InvalidParameterError(PolicyViolationError):
    """The storage class defines a parameter the provisioner does not support."""

    def __init__(self, parameter: str, *args):
        self.parameter = parameter
        super().__init__(f"Invalid parameter: {parameter!r}", *args)


class RecoverableError(ProvisionerError):
    """Transient failure. The operation can be attempted again."""

    retryable = True


class BackendError(RecoverableError):
    """A call to the storage appliance failed.

    Storage backend clients raise this exception (or a subclass) on every failure.
    """

    def __init__(
        self, message: str, *args, operation: str | None = None, volume: str | None = None
    ):
        self.operation = operation
        self.volume = volume
        super().__init__(message, *args)


class MountPathError(RecoverableError):
    """The local mount directory can't be created."""

    def __init__(self, path: str, *args):
        self.path = path
        super().__init__(f"Failed to prepare mount path {path}", *args)


class OperationCancelledError(RecoverableError):
    """The caller cancelled the operation or its deadline expired."""

    def __init__(self, step: str, *args):
        self.step = step
        super().__init__(f"Operation cancelled before step: {step}", *args)


class IgnoredError(ProvisionerError):
    """The volume is not a responsibility of this provisioner."""

    ignorable = True

    def __init__(self, reason: str, *args):
        self.reason = reason
        super().__init__(reason, *args)


class MissingIdentityError(IgnoredError):
    """The volume has no ownership tag."""

    def __init__(self, *args):
        super().__init__("identity annotation not found on volume", *args)


class ForeignVolumeError(IgnoredError):
    """The volume ownership tag belongs to another provisioner."""

    def __init__(self, owner: str, *args):
        self.owner = owner
        super().__init__("identity annotation on volume does not match ours", *args)


class MissingVolumeNameError(IgnoredError):
    """The volume does not reference any backend volume."""

    def __init__(self, *args):
        super().__init__("no backend volume defined", *args)


class InvalidManifestError(ProvisionerError):
    """A manifest file does not exist, can't be parsed or misses mandatory data."""
