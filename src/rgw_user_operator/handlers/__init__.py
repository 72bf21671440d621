"""Handler modules for CRD resources."""

# Import handlers to register them via their @kopf decorators
from . import object_user  # noqa: F401
