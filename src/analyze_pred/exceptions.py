"""Custom exceptions for the prediction preparation pipeline."""


class PipelineError(Exception):
    """Base exception for all pipeline errors."""
    pass


class InputFileError(PipelineError, OSError):
    """Exception raised when an input file cannot be opened or read."""

    def __init__(self, message: str, path: str = None):
        self.path = path

        if path is not None:
            message = f"Cannot read {path}: {message}"

        super().__init__(message)


class OutputFileError(PipelineError, OSError):
    """Exception raised when an output file cannot be written."""

    def __init__(self, message: str, path: str = None):
        self.path = path

        if path is not None:
            message = f"Cannot write {path}: {message}"

        super().__init__(message)


class ParseError(PipelineError):
    """Exception raised for a line that does not match the expected record shape."""

    def __init__(self, message: str, line_number: int = None, line_content: str = None):
        self.line_number = line_number
        self.line_content = line_content

        if line_number is not None:
            message = f"Line {line_number}: {message}"
        if line_content is not None:
            message = f"{message} (content: {line_content[:50]}...)"

        super().__init__(message)


class RangeError(PipelineError):
    """Exception raised when slice coordinates fall outside a sequence."""

    def __init__(
        self,
        message: str,
        identifier: str = None,
        start: int = None,
        end: int = None,
        length: int = None,
    ):
        self.identifier = identifier
        self.start = start
        self.end = end
        self.length = length

        if identifier is not None:
            message = f"{identifier}: {message}"
        if start is not None and end is not None:
            message = f"{message} (start={start}, end={end}"
            if length is not None:
                message = f"{message}, length={length}"
            message = f"{message})"

        super().__init__(message)


class ConfigurationError(PipelineError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_file: str = None, parameter: str = None):
        self.config_file = config_file
        self.parameter = parameter

        if config_file is not None:
            message = f"Configuration error in {config_file}: {message}"
        if parameter is not None:
            message = f"{message} (parameter: {parameter})"

        super().__init__(message)
