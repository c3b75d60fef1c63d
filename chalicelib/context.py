import os

from chalicelib.constants.constants import ACCESS_TOKEN_TTL_HOURS, REFRESH_TOKEN_TTL_HOURS
from chalicelib.utils.db import Store


class AppContext:
    """
    Everything a request handler needs besides the request itself:
    the document store and the token settings.
    Built once at startup and passed to the entity classes explicitly
    """

    def __init__(self, store: Store, secret_key: str = None,
                 access_token_ttl_hours: int = ACCESS_TOKEN_TTL_HOURS,
                 refresh_token_ttl_hours: int = REFRESH_TOKEN_TTL_HOURS):
        self.store = store
        self.secret_key = secret_key
        self.access_token_ttl_hours = access_token_ttl_hours
        self.refresh_token_ttl_hours = refresh_token_ttl_hours

    @classmethod
    def from_environ(cls):
        return cls(
            store=Store.from_environ(),
            secret_key=os.environ.get('SECRET_KEY'),
            access_token_ttl_hours=int(os.environ.get('ACCESS_TOKEN_TTL_HOURS', ACCESS_TOKEN_TTL_HOURS)),
            refresh_token_ttl_hours=int(os.environ.get('REFRESH_TOKEN_TTL_HOURS', REFRESH_TOKEN_TTL_HOURS))
        )
