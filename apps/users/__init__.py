"""Users app package.

Defines the custom user model used as AUTH_USER_MODEL throughout the
project (``apps.users.models.CustomUser``) together with registration,
login and profile endpoints. Bearer credentials are issued by SimpleJWT.
"""
