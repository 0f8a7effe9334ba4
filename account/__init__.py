from .account import account_bp
