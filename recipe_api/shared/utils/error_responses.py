# recipe_api/shared/utils/error_responses.py


def _error_example(code: str, message: str) -> dict:
    return {"success": False, "error": {"code": code, "message": message}}


# Respostas de erro genéricas
common_errors = {
    500: {
        "description": "Internal server error",
        "content": {"application/json": {"example": _error_example("INTERNAL_ERROR", "Internal server error")}},
    }
}

rate_limit_errors = {
    429: {
        "description": "Too many requests (Retry-After header set)",
        "content": {"application/json": {"example": _error_example("RATE_LIMITED", "Too many requests")}},
    },
}

csrf_errors = {
    403: {
        "description": "Forbidden (CSRF token missing or mismatched, or role/status check failed)",
        "content": {
            "application/json": {
                "examples": {
                    "csrf": {
                        "summary": "CSRF mismatch",
                        "value": _error_example("CSRF_TOKEN_INVALID", "Invalid CSRF token"),
                    },
                    "forbidden": {
                        "summary": "Role or status check failed",
                        "value": _error_example("FORBIDDEN", "Access denied"),
                    },
                }
            }
        },
    },
    413: {
        "description": "Payload too large",
        "content": {
            "application/json": {
                "example": _error_example("PAYLOAD_TOO_LARGE", "Request payload exceeds allowed size")
            }
        },
    },
}

# Erros para autenticação e registro de usuário
auth_errors = {
    400: {
        "description": "Validation error",
        "content": {"application/json": {"example": _error_example("VALIDATION_ERROR", "Validation failed")}},
    },
    401: {
        "description": "Unauthorized (invalid credentials or session)",
        "content": {
            "application/json": {
                "examples": {
                    "invalid_credentials": {
                        "summary": "Invalid Credentials",
                        "value": _error_example("INVALID_CREDENTIALS", "Invalid email or password"),
                    },
                    "unauthenticated": {
                        "summary": "No session",
                        "value": _error_example("UNAUTHORIZED", "Authentication required"),
                    },
                }
            }
        },
    },
    409: {
        "description": "Conflict (Email already in use)",
        "content": {"application/json": {"example": _error_example("CONFLICT", "Email already registered")}},
    },
    **rate_limit_errors,
    **common_errors,
}

# Erros para moderação de usuários
admin_errors = {
    **csrf_errors,
    401: auth_errors[401],
    404: {
        "description": "User not found",
        "content": {"application/json": {"example": _error_example("NOT_FOUND", "User not found")}},
    },
    **rate_limit_errors,
    **common_errors,
}

# Erros para perfis e interações de usuário
user_errors = {
    **admin_errors,
    400: auth_errors[400],
}
