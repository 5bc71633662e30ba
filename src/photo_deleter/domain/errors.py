"""Error taxonomy for photo library interactions."""


class PhotoLibraryError(Exception):
    """Base error raised by photo library collaborators."""


class PermissionDeniedError(PhotoLibraryError):
    """Access to the photo library was not granted."""


class ImageRequestTransientError(PhotoLibraryError):
    """The image could not be delivered this time but may succeed on retry."""


class ImageRequestCancelledError(PhotoLibraryError):
    """The library aborted delivery, e.g. superseded by a newer request."""


class ImageRequestEmptyError(PhotoLibraryError):
    """The library completed the request without any image data."""


class AlbumCreationError(PhotoLibraryError):
    """The quarantine album could not be created."""


class AlbumWriteError(PhotoLibraryError):
    """An asset could not be added to an album."""
