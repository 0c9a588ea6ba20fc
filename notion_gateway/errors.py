"""
Error taxonomy for the gateway.

Every error carries the HTTP status it is reported with. The app-level
exception handler in main.py turns them into {"ok": false, "error": ...}.
"""


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    """Malformed request body."""
    status_code = 400


class WriteIntentDetected(GatewayError):
    status_code = 400

    def __init__(self, keyword: str):
        super().__init__(
            f'Write operation rejected: request contains forbidden keyword "{keyword}". '
            "This API is read-only."
        )
        self.keyword = keyword


class AuthenticationError(GatewayError):
    status_code = 401


class ConfigurationError(GatewayError):
    """The server itself is missing a secret or credential."""
    status_code = 500


class MethodNotAllowed(GatewayError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed. Use POST."):
        super().__init__(message)


class BlockedOperation(GatewayError):
    """A mutation-shaped call was stopped before leaving the process."""
    status_code = 500

    def __init__(self, method: str, path: str):
        super().__init__(
            f"BLOCKED: Write operation attempted — {method} {path}. This API is read-only."
        )
        self.method = method
        self.path = path


class UpstreamError(GatewayError):
    status_code = 500

    def __init__(self, status: int, body: str):
        super().__init__(f"Notion API error {status}: {body}")
        self.status = status
        self.body = body
