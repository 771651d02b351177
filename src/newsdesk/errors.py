"""Errors raised inside the authoring pipeline.

None of these escape the publish controller or the autosave scheduler; both
convert them into a notification and a status flag.
"""


class AuthoringError(Exception):
    """Base exception for authoring pipeline failures."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ValidationError(AuthoringError):
    """A publish rule rejected the record; nothing was sent remotely.

    Attributes:
        field: Field of the first violated rule
        violations: Every violation as (field, message), in rule order
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        violations: list[tuple[str, str]] | None = None,
    ):
        self.field = field
        self.violations = violations or []
        super().__init__(message)


class DuplicateSlugError(AuthoringError):
    """Another article already owns the candidate slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f'The slug "{slug}" is already used by another article')


class AuthenticationRequiredError(AuthoringError):
    """No signed-in identity; the caller should redirect to sign-in."""

    def __init__(self, message: str = "You must be signed in to save articles", redirect_to: str = "/auth"):
        self.redirect_to = redirect_to
        super().__init__(message)


class UploadError(AuthoringError):
    """The staged image could not be uploaded; no row was written."""

    pass


class RemoteWriteError(AuthoringError):
    """The insert or update was rejected or never reached the backend.

    Attributes:
        hint: Backend-supplied remediation hint, if any
    """

    def __init__(self, message: str, hint: str | None = None):
        self.hint = hint
        super().__init__(message)


class AutosaveError(AuthoringError):
    """An autosave tick could not push to the remote store."""

    pass
