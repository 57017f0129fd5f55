from servicehours.services.error_codes import ErrorCode


class ServiceError(Exception):
    status_code = 500

    def __init__(self, code: str | ErrorCode, message: str | None = None) -> None:
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message or self.code
        super().__init__(self.message)


class NotFoundError(ServiceError):
    status_code = 404


class PermissionDeniedError(ServiceError):
    status_code = 403


class ConflictError(ServiceError):
    status_code = 409


class ValidationError(ServiceError):
    status_code = 422
