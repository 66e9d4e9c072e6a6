import grpc


class LearnLinkError(Exception):
    """Base class for errors surfaced to callers.

    Each subclass carries the gRPC status code used when the error ends a
    unary call.
    """
    status_code = grpc.StatusCode.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LearnLinkError):
    """Malformed input, rejected before any mutation."""
    status_code = grpc.StatusCode.INVALID_ARGUMENT


class NotFoundError(LearnLinkError):
    """The targeted group or resource does not exist."""
    status_code = grpc.StatusCode.NOT_FOUND


class PermissionDeniedError(LearnLinkError):
    """The requester is not allowed to perform the mutation."""
    status_code = grpc.StatusCode.PERMISSION_DENIED


class InvalidStateError(LearnLinkError):
    """A chat session event arrived in a state that does not accept it."""
    status_code = grpc.StatusCode.FAILED_PRECONDITION
