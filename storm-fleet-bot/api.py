import httpx


BASE_URL = "https://games-test.datsteam.dev/api/"


class GameClient:
    """
    HTTP client for the arena API: map, scan and ship commands.

    Every call raises httpx.HTTPError on transport or status failures,
    the caller decides whether to retry on the next tick.
    """

    def __init__(self, token, base_url=BASE_URL, timeout=10.0, transport=None):
        if not token:
            raise ValueError("auth token required, set STORM_FLEET_TOKEN")

        self._client = httpx.Client(
            base_url=base_url,
            headers={"Accept": "application/json", "X-Auth-Token": token},
            timeout=timeout,
            transport=transport,
        )

    def get_map(self):
        return self._get("map")

    def scan(self):
        return self._get("scan")

    def send(self, commands):
        response = self._client.post("shipCommand", json={"ships": commands})
        response.raise_for_status()
        return response.json()

    def close(self):
        self._client.close()

    def _get(self, path):
        response = self._client.get(path)
        response.raise_for_status()
        return response.json()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
