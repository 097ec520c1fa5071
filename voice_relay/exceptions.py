"""Exception classes for the relay service.

Each exception carries the HTTP status it maps to. The handlers installed by
``voice_relay.main.create_app`` turn them into JSON error bodies.
"""


class VoiceRelayError(Exception):
    """Base exception for all relay service errors."""

    status_code: int = 500

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)

    @property
    def public_message(self) -> str:
        """Message safe to return to the client."""
        return self.message


class ValidationError(VoiceRelayError):
    """Raised when a request is missing required input."""

    status_code = 400


class InvalidCredentialsError(VoiceRelayError):
    """Raised when a password does not match the stored hash."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class UserNotFoundError(VoiceRelayError):
    """Raised when no user record exists for an email."""

    status_code = 404

    def __init__(self, email: str):
        """Initialize the exception.

        Args:
            email: The email that was looked up.
        """
        self.email = email
        super().__init__("User not found")


class UserAlreadyExistsError(VoiceRelayError):
    """Raised when registering an email that already has a record."""

    status_code = 409

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class StoreError(VoiceRelayError):
    """Raised when the user store fails for any reason other than a conflict."""

    status_code = 500

    @property
    def public_message(self) -> str:
        return "Internal server error"


class SynthesisError(VoiceRelayError):
    """Raised when the speech provider fails to produce audio."""

    status_code = 500
