class ImgcatError(Exception):
    """Base class for failures reported by the command line with an exit code."""

    exit_code = 1
    message = "Failed to convert image."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InputError(ImgcatError):
    message = "Failed to read image data."


class FormatDetectionError(ImgcatError):
    message = "Unrecognized image format."


class AllocationFailure(ImgcatError):
    exit_code = 2
    message = "Memory allocation failure."


class NotABitmap(ImgcatError):
    exit_code = 3
    message = "The input was not recognized as a BMP file."


class TruncatedOrInvalidBitmap(ImgcatError):
    exit_code = 3
    message = "Invalid BMP file."


class UnsupportedBitDepth(ImgcatError):
    exit_code = 4
    message = "BMP must be a 24-bit image."


class UnsupportedImage(ImgcatError):
    exit_code = 5
    message = "Unsupported or invalid PNG/JPEG image."
