"""
Tracker API client.

Fetches the player's level (buy-in caps) and submits analyzed sessions.
"""

import logging
from typing import List, Optional

import requests

from .config import get_config
from .models import DEFAULT_PLAYER_LEVEL, PlayerLevel, Summary, TournamentFact

logger = logging.getLogger(__name__)


class TrackerError(RuntimeError):
    """The tracker API could not be reached or returned an unusable response."""


class TrackerClient:
    """Client for the player tracker API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        config = get_config()
        self.base_url = (base_url or config.tracker_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.request_timeout
        self._session = session or requests.Session()

    def _request(self, method: str, endpoint: str, token: str, payload: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{endpoint}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        try:
            response = self._session.request(method, url, headers=headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise TrackerError(f"{method} {endpoint} failed: {e}") from e
        except ValueError as e:
            raise TrackerError(f"{method} {endpoint} returned invalid JSON: {e}") from e

    def get_player_level(self, token: str) -> PlayerLevel:
        """Fetch the current player's level. Raises TrackerError on failure."""
        data = self._request("GET", "/players/current", token)
        try:
            return PlayerLevel.from_tracker_response(data)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise TrackerError(f"Unexpected player level response: {e}") from e

    def get_player_level_or_default(self, token: Optional[str]) -> PlayerLevel:
        """Fetch the player's level, falling back to the default level."""
        if not token:
            return DEFAULT_PLAYER_LEVEL
        try:
            return self.get_player_level(token)
        except TrackerError as e:
            logger.warning(f"Using default player level: {e}")
            return DEFAULT_PLAYER_LEVEL

    def submit_session(self, token: str, summary: Summary, tournaments: List[TournamentFact]) -> str:
        """
        Submit an analyzed session.

        Returns:
            The tracker's session identifier
        """
        session_data = {
            "totalProfit": float(summary.net_profit),
            "normalDeal": float(summary.normal_deal),
            "automaticSale": float(summary.automatic_sale),
            "tournaments": [
                {
                    "name": t.name,
                    "category": t.category.value,
                    "buyIn": float(t.buy_in),
                    "result": float(t.result),
                    "normalDeal": float(t.normal_deal),
                    "automaticSale": float(t.automatic_sale),
                    "currencyCode": t.currency_code,
                }
                for t in tournaments
            ],
        }

        data = self._request("POST", "/sessions", token, session_data)
        session_id = data.get("sessionId") if isinstance(data, dict) else None
        if not session_id:
            raise TrackerError("Session submission returned no sessionId")

        logger.info(f"Submitted {len(tournaments)} tournaments as session {session_id}")
        return str(session_id)
