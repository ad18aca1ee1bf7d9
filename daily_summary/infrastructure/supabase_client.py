import httpx

from daily_summary.domain.errors import FetchError
from daily_summary.shared.decorators import log_errors


class SupabaseError(FetchError):
    """Raised when the Supabase REST API fails or returns an unexpected body."""


class SupabaseRestClient:
    """Thin httpx wrapper for the Supabase PostgREST endpoint."""

    REST_PATH = "/rest/v1"

    def __init__(
        self, client: httpx.Client, base_url: str, service_role_key: str
    ) -> None:
        self._client = client
        self._base = base_url.rstrip("/") + self.REST_PATH
        self._headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Accept": "application/json",
        }

    @log_errors
    def select(
        self,
        table: str,
        params: list[tuple[str, str]],
        limit: int,
        offset: int = 0,
    ) -> list[dict]:
        """GET rows of ``table`` matching the PostgREST filters in ``params``.

        Raises:
            SupabaseError: on transport failures, non-2xx HTTP responses, or a
                body that is not a JSON array.
        """
        query = [*params, ("limit", str(limit)), ("offset", str(offset))]

        try:
            response = self._client.get(
                f"{self._base}/{table}", headers=self._headers, params=query
            )
        except httpx.HTTPError as exc:
            raise SupabaseError(f"Supabase request failed: {exc}") from exc

        if not response.is_success:
            raise SupabaseError(
                f"Supabase API error {response.status_code}: {response.text}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise SupabaseError(f"Invalid JSON from Supabase: {exc}") from exc
        if not isinstance(body, list):
            raise SupabaseError(f"Expected a list of rows, got: {body!r}")

        return body
