import requests

from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from typing import Any, Dict, Optional

from parking_citations.services.constants.exceptions import \
    APIFailureException

DEFAULT_TIMEOUT_SECONDS = 20


def mount_retries(session: requests.Session) -> requests.Session:
    """Mount a retrying adapter on both schemes of the session."""
    retries = Retry(total=5,
                    backoff_factor=0.1,
                    status_forcelist=[500, 502, 503, 504],
                    raise_on_status=False)

    adapter = HTTPAdapter(max_retries=retries)

    session.mount('https://', adapter)
    session.mount('http://', adapter)

    return session


def build_session(headers: Optional[Dict[str, str]] = None
                  ) -> requests.Session:
    session = requests.Session()

    if headers:
        session.headers.update(headers)

    return mount_retries(session)


def raise_for_status_range(response: Any, url: str) -> None:
    if response.status_code in range(200, 300):
        return
    elif response.status_code in range(300, 400):
        raise APIFailureException(
            f'redirect error when accessing {url}')
    elif response.status_code in range(400, 500):
        raise APIFailureException(
            f'user error when accessing {url}')
    elif response.status_code in range(500, 600):
        raise APIFailureException(
            f'server error when accessing {url}')
    else:
        raise APIFailureException(
            f'unknown error when accessing {url}')
