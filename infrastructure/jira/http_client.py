"""
Jira HTTP Client - Low-level HTTP interactions with Jira Cloud.

This class handles only HTTP concerns, keeping infrastructure separate from domain logic.
Transport failures are translated into the domain's remote tracker errors.
"""
import base64
from typing import Dict, Optional, Any

import requests

from core.domain.exceptions import (
    RemoteTrackerError,
    RemoteUnavailableError,
    RemoteValidationError
)


class JiraHttpClient:
    """Low-level HTTP client for the Jira REST and Agile APIs."""

    API_VERSION = "3"  # Jira Cloud REST API v3
    AGILE_VERSION = "1.0"

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: int = 30
    ):
        """Initialize Jira HTTP client.

        Args:
            base_url: Jira instance URL (e.g., "https://company.atlassian.net")
            email: User email for authentication
            api_token: API token
            timeout: Request timeout in seconds
        """
        if not api_token:
            raise ValueError("API token is required")
        if not base_url:
            raise ValueError("Base URL is required")
        if not email:
            raise ValueError("Email is required")

        self._base_url = base_url.rstrip('/')
        self._email = email
        self._api_token = api_token
        self._timeout = timeout
        self._headers = self._create_headers()

    @property
    def base_url(self) -> str:
        """Base URL for API calls."""
        return self._base_url

    @property
    def timeout(self) -> int:
        return self._timeout

    @property
    def headers(self) -> Dict[str, str]:
        """Headers for API calls."""
        return self._headers.copy()

    def _create_headers(self) -> Dict[str, str]:
        """Create authentication headers."""
        # Jira Cloud uses Basic Auth with email:api_token
        credentials = base64.b64encode(
            f"{self._email}:{self._api_token}".encode()
        ).decode()
        return {
            'Content-Type': 'application/json',
            'Authorization': f'Basic {credentials}',
            'Accept': 'application/json'
        }

    def _get_api_base(self, agile: bool = False) -> str:
        """Get the REST (issues, projects) or Agile (boards, sprints) API base URL."""
        if agile:
            return f"{self._base_url}/rest/agile/{self.AGILE_VERSION}"
        return f"{self._base_url}/rest/api/{self.API_VERSION}"

    def _request(
        self,
        method: str,
        endpoint: str,
        agile: bool = False,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """Send a request and decode the JSON response.

        Raises:
            RemoteValidationError: If Jira answers with a 4xx status
            RemoteUnavailableError: On connection errors, timeouts or 5xx
        """
        url = f"{self._get_api_base(agile)}/{endpoint}"

        try:
            response = requests.request(
                method,
                url,
                headers=self._headers,
                json=data,
                params=params,
                timeout=self._timeout
            )
        except requests.Timeout as e:
            raise RemoteUnavailableError(
                f"Jira request timed out after {self._timeout}s: {method} {endpoint}"
            ) from e
        except requests.ConnectionError as e:
            raise RemoteUnavailableError(f"Could not connect to Jira at {self._base_url}") from e
        except requests.RequestException as e:
            raise RemoteUnavailableError(f"Jira request failed: {e}") from e

        if response.status_code >= 500:
            raise RemoteUnavailableError(
                f"Jira server error {response.status_code}: {method} {endpoint}",
                status_code=response.status_code,
                payload=self._error_payload(response)
            )
        if response.status_code >= 400:
            raise RemoteValidationError(
                f"Jira rejected {method} {endpoint} with status {response.status_code}",
                status_code=response.status_code,
                payload=self._error_payload(response)
            )

        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RemoteTrackerError(
                f"Invalid JSON in Jira response: {method} {endpoint}",
                status_code=response.status_code
            ) from e

    @staticmethod
    def _error_payload(response: requests.Response) -> Any:
        """Error body of a failed response, JSON when possible."""
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, endpoint: str, params: Optional[Dict] = None, agile: bool = False) -> Any:
        """Make GET request to Jira API.

        Args:
            endpoint: API endpoint (relative to API base)
            params: Optional query parameters
            agile: Use the Agile API base instead of REST v3

        Returns:
            JSON response as dictionary (or list)
        """
        return self._request('GET', endpoint, agile=agile, params=params)

    def post(
        self,
        endpoint: str,
        data: Dict[str, Any],
        params: Optional[Dict] = None,
        agile: bool = False
    ) -> Any:
        """Make POST request to Jira API.

        Args:
            endpoint: API endpoint
            data: Request body
            params: Optional query parameters
            agile: Use the Agile API base instead of REST v3

        Returns:
            JSON response as dictionary, empty for 204 responses
        """
        return self._request('POST', endpoint, agile=agile, data=data, params=params)
