from .auth import (
    auth_bp,
    token_required,
    admin_required,
    issue_token,
    decode_token,
    create_user,
    TokenIdentity,
    DuplicateEmailError,
)
