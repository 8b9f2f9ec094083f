"""Client modules for the public and private REST APIs."""

from .auth import sign_body, sign_request
from .cooldown import CoolDown, CoolDownStrategy, NoCoolDown
from .credentials import Credentials
from .rest import RestClient
from .transport import HttpTransport

__all__ = [
    "CoolDown",
    "CoolDownStrategy",
    "Credentials",
    "HttpTransport",
    "NoCoolDown",
    "RestClient",
    "sign_body",
    "sign_request",
]
