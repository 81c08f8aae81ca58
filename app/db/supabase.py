"""Supabase clients.

``get_supabase()`` returns a lazily-initialized, process-wide client built
with the service key; it backs the ``profiles`` table.  ``new_auth_client()``
returns a fresh client for end-user auth calls, because a client that signs a
user in keeps that user's session and must not be shared across requests.
"""

from supabase import Client, create_client
from supabase.lib.client_options import SyncClientOptions

from app.core.config import settings

_client: Client | None = None


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def new_auth_client() -> Client:
    """Return a new client for a single sign-up / sign-in / sign-out call.

    The session it obtains belongs to the caller, so the client neither
    stores it nor schedules a background refresh of its token.
    """
    return create_client(
        settings.SUPABASE_URL,
        settings.auth_key,
        options=SyncClientOptions(auto_refresh_token=False, persist_session=False),
    )
