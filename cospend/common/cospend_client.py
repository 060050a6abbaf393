"""Client for interacting with the Nextcloud Cospend OCS API.

This module provides a thin, synchronous interface for the operations the
CLI needs: project and project-list lookups, bill listing, creation and
deletion, and the authenticated user's locale settings.
"""

# Standard library
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

# Third-party
import requests

# Local application
from cospend.common.settings import Config, normalize_url
from cospend.common.utils import LOG
from cospend.constants.cospend import (
    BILL_REPEAT_NONE,
    COSPEND_API_BASE,
    OCS_OK,
    REQUEST_TIMEOUT_SECONDS,
    USER_INFO_PATH,
)
from cospend.models import Bill, NewBill, Project, ProjectSummary, UserInfo


class CospendAPIError(RuntimeError):
    """Raised when the server is unreachable or answers with an error."""


# Handles Cospend OCS API access
class CospendClient:
    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        if not all([config.domain, config.user, config.password]):
            raise ValueError("Nextcloud domain, user and password are all required.")
        self.config = config
        self.base_url = normalize_url(config.domain)
        self.session = session or requests.Session()
        self.session.auth = (config.user, config.password)
        self.session.headers.update(
            {"OCS-APIRequest": "true", "Accept": "application/json"}
        )

    def _project_path(self, project_id: str, *parts: str) -> str:
        path = f"{COSPEND_API_BASE}/projects/{quote(project_id, safe='')}"
        for part in parts:
            path += f"/{part}"
        return path

    def _request(self, method: str, path: str, data: Optional[Dict[str, str]] = None) -> Any:
        """Send a request and return the ``ocs.data`` payload.

        Raises:
            CospendAPIError: On connection errors, non-200 HTTP status, an
                undecodable body or an OCS status code other than 200
        """
        url = f"{self.base_url}{path}"
        LOG.debug(f"Request: {method} {url}")
        LOG.debug(f"Headers: OCS-APIRequest=true, Accept=application/json, Auth=Basic {self.config.user}:***")
        if data is not None:
            LOG.debug(f"Request body: {data}")

        try:
            resp = self.session.request(method, url, data=data, timeout=REQUEST_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            LOG.debug(f"Request error: {e}")
            raise CospendAPIError(f"{method} {path}: {e}") from e

        LOG.debug(f"Response: {resp.status_code} {resp.reason}")

        if resp.status_code != 200:
            raise CospendAPIError(f"API returned status {resp.status_code}: {resp.text}")

        try:
            body = resp.json()
        except ValueError as e:
            raise CospendAPIError(f"decoding response: {e}") from e

        ocs = body.get("ocs") if isinstance(body, dict) else None
        if not isinstance(ocs, dict):
            raise CospendAPIError("decoding response: missing 'ocs' envelope")
        meta = ocs.get("meta") or {}
        if meta.get("statuscode") != OCS_OK:
            raise CospendAPIError(f"API error: {meta.get('message', '')}")
        return ocs.get("data")

    def get_project(self, project_id: str) -> Project:
        """Fetch project details including members, categories and payment modes."""
        data = self._request("GET", self._project_path(project_id))
        try:
            return Project.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise CospendAPIError(f"decoding project data: {e}") from e

    def get_projects(self) -> List[ProjectSummary]:
        """Fetch all projects the user has access to."""
        data = self._request("GET", f"{COSPEND_API_BASE}/projects")
        LOG.debug(f"Projects response: {data}")
        if not isinstance(data, list):
            raise CospendAPIError("decoding projects data: expected a list")
        try:
            return [ProjectSummary.from_dict(p) for p in data]
        except (AttributeError, TypeError, ValueError) as e:
            raise CospendAPIError(f"decoding projects data: {e}") from e

    def get_bills(self, project_id: str) -> List[Bill]:
        """Fetch all bills of a project.

        The API answers ``{"nb_bills": N, "bills": [...], "allBillIds": [...],
        "timestamp": N}``; only ``bills`` is used.
        """
        data = self._request("GET", self._project_path(project_id, "bills"))
        if not isinstance(data, dict):
            raise CospendAPIError("decoding bills data: expected an object")
        try:
            return [Bill.from_dict(b) for b in data.get("bills") or []]
        except (AttributeError, TypeError, ValueError) as e:
            raise CospendAPIError(f"decoding bills data: {e}") from e

    def create_bill(self, project_id: str, bill: NewBill) -> None:
        """Create a new bill in the project."""
        form = {
            "what": bill.what,
            "amount": f"{bill.amount:.2f}",
            "payer": str(bill.payer_id),
            "date": bill.date,
            "timestamp": str(int(time.time())),
            "repeat": BILL_REPEAT_NONE,
            "payedFor": ",".join(str(member_id) for member_id in bill.owed_to),
        }
        if bill.comment:
            form["comment"] = bill.comment
        if bill.payment_mode_id:
            form["paymentmodeid"] = str(bill.payment_mode_id)
        if bill.category_id:
            form["categoryid"] = str(bill.category_id)
        if bill.original_currency_id:
            form["original_currency_id"] = str(bill.original_currency_id)

        self._request("POST", self._project_path(project_id, "bills"), data=form)

    def delete_bill(self, project_id: str, bill_id: int) -> None:
        """Delete a bill from the project."""
        self._request("DELETE", self._project_path(project_id, "bills", str(bill_id)))

    def get_user_info(self) -> UserInfo:
        """Fetch the authenticated user's locale and language."""
        data = self._request("GET", USER_INFO_PATH)
        try:
            return UserInfo.from_dict(data)
        except ValueError as e:
            raise CospendAPIError(f"decoding user info: {e}") from e
