"""
Operator command line tools.

- passport_logout: revoke a refresh token (``passport-logout``).
"""
