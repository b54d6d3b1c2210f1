"""Credential backends for connection passwords."""

from mail_hostauth.credentials.base import CredentialBackend
from mail_hostauth.credentials.env import EnvCredentialBackend

__all__ = ["CredentialBackend", "EnvCredentialBackend"]
