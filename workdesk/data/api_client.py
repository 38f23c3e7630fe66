import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from workdesk.settings import get_settings

logger = logging.getLogger(__name__)

_SECRET_GETTER = None


class ApiError(RuntimeError):
    def __init__(self, status_code, reason, detail):
        super().__init__(f"API error {status_code} {reason}: {detail}")
        self.status_code = status_code
        self.reason = reason
        self.detail = detail


def _build_session():
    session = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("GET", "POST", "PUT", "PATCH", "DELETE"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter):
    global _SECRET_GETTER
    _SECRET_GETTER = secret_getter


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def api_base_url():
    return (
        _get_secret(("app", "API_BASE_URL"))
        or _get_secret(("API_BASE_URL",))
        or get_settings().api_base_url
        or ""
    )


def api_key():
    return (
        _get_secret(("app", "API_KEY"))
        or _get_secret(("API_KEY",))
        or get_settings().api_key
        or ""
    )


def is_enabled():
    return bool(api_base_url() and api_key())


def request(method: str, path: str, params: dict | None = None, json: Any = None, timeout: int | None = None) -> Any:
    base = api_base_url().rstrip("/")
    if not base:
        raise RuntimeError("API_BASE_URL not configured")
    token = api_key()
    if not token:
        raise RuntimeError("API_KEY not configured")
    headers = {
        "api_key": token,
        "Accept": "application/json",
    }
    url = f"{base}{path}"
    timeout = timeout or get_settings().request_timeout
    logger.debug("%s %s params=%s", method, path, params)
    response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        logger.warning("%s %s failed with %s", method, path, response.status_code)
        raise ApiError(response.status_code, response.reason, detail)
    if response.status_code == 204 or not response.content:
        return None
    return response.json()
