# recipe_api/shared/utils/success_responses.py

# Respostas de sucesso genéricas
common_success = {
    200: {
        "description": "Request processed successfully",
        "content": {
            "application/json": {
                "example": {"success": True, "data": None, "message": "Operation completed successfully."}
            }
        }
    }
}

_user_example = {
    "id": "user-3fa85f645717",
    "username": "chef_ana",
    "first_name": "Ana",
    "last_name": "Souza",
    "full_name": "Ana Souza",
    "email": "ana@example.com",
    "role": "user",
    "status": "active",
    "birthday": None,
    "bio": "",
    "location": "",
    "cooking_level": "Beginner",
    "joined_date": "2024-01-01T00:00:00+00:00",
    "last_active": "2024-01-02T10:00:00+00:00",
}

# Sucessos para autenticação (cookies de sessão emitidos)
auth_success = {
    200: {
        "description": "Authenticated; ko_access, ko_refresh and ko_csrf cookies set",
        "content": {
            "application/json": {
                "example": {"success": True, "data": {"user": _user_example}, "message": "Login successful"}
            }
        }
    },
}

signup_success = {
    201: {
        "description": "User created; session cookies set",
        "content": {
            "application/json": {
                "example": {
                    "success": True,
                    "data": {"user": {**_user_example, "status": "pending"}},
                    "message": "Account created successfully",
                }
            }
        }
    },
}

logout_success = {
    200: {
        "description": "Session cookies cleared",
        "content": {
            "application/json": {
                "example": {"success": True, "data": None, "message": "Logged out successfully"}
            }
        }
    },
}
