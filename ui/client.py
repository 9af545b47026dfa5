import os
from typing import Any, Dict, Optional

import requests

API_URL = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
CLIENT_TIMEOUT = float(os.environ.get("CLIENT_TIMEOUT", "10"))


class FetchFailure(RuntimeError):
    pass


def fetch_analytics(api_url: Optional[str] = None, timeout: Optional[float] = None) -> Optional[Dict[str, Any]]:
    """
    GET /analytics and return the decoded payload as-is (no validation).
    A JSON null body comes back as None. Any transport, HTTP or decode
    problem is raised as FetchFailure.
    """
    base = (api_url or API_URL).rstrip("/")
    try:
        r = requests.get(f"{base}/analytics", timeout=timeout or CLIENT_TIMEOUT)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        raise FetchFailure(f"analytics request failed: {e}") from e
    except ValueError as e:
        raise FetchFailure(f"analytics response is not JSON: {e}") from e
