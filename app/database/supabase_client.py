from supabase import create_client, Client, ClientOptions
from app.config import settings


def _client_options() -> ClientOptions:
    # Shared per process: never keep the session of whoever signed up or was introspected last
    return ClientOptions(persist_session=False, auto_refresh_token=False)


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Client with the anon key; used for sign-up and token introspection."""
        if cls._client is None:
            cls._client = create_client(
                settings.supabase_url, settings.supabase_anon_key, options=_client_options()
            )
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Needed for profiles, rpc and admin deletes."""
        if cls._service_client is None:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key, options=_client_options()
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
