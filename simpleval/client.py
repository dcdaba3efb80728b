"""Cliente HTTP da API, configurado explicitamente por instância"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Configuração passada a quem faz as requisições (sem defaults globais)"""
    base_url: str
    timeout: float = 10.0
    api_key: Optional[str] = None
    api_key_header: str = "X-API-Key"
    extra_headers: Dict[str, str] = field(default_factory=dict)


class ApiError(Exception):
    """Resposta de erro da API"""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        detail = payload.get("detail") if isinstance(payload, dict) else payload
        super().__init__(f"HTTP {status_code}: {detail}")

    @property
    def error_type(self) -> Optional[str]:
        return self.payload.get("error") if isinstance(self.payload, dict) else None

    @property
    def reasons(self) -> List[str]:
        if isinstance(self.payload, dict):
            return list(self.payload.get("reasons", []))
        return []


class SimplevalClient:
    """Cliente das rotas de partidas e participantes"""

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "User-Agent": "Simpleval-Client/1.0",
            **config.extra_headers,
        })
        if config.api_key:
            self.session.headers[config.api_key_header] = config.api_key

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.session.request(
            method, self._url(path), timeout=self.config.timeout, **kwargs
        )
        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            logger.warning(f"{method} {path} falhou com {response.status_code}")
            raise ApiError(response.status_code, payload)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Partidas
    def list_matches(self) -> List[dict]:
        return self._request("GET", "/matches")

    def get_match(self, match_id: int) -> dict:
        return self._request("GET", f"/matches/{match_id}")

    def create_match(self, match: dict) -> dict:
        return self._request("POST", "/matches", json=match)

    def validate_match(self, match: dict) -> dict:
        return self._request("POST", "/matches/validate", json=match)

    def update_match(self, match_id: int, changes: dict) -> dict:
        return self._request("PUT", f"/matches/{match_id}", json=changes)

    def delete_match(self, match_id: int) -> None:
        self._request("DELETE", f"/matches/{match_id}")

    # Jogadores
    def list_players(self, team_id: Optional[int] = None) -> List[dict]:
        params = {"team_id": team_id} if team_id is not None else None
        return self._request("GET", "/players", params=params)

    # Participantes
    def get_match_player(self, match_id: int, player_id: int) -> dict:
        return self._request("GET", f"/match_players/{match_id}/{player_id}")

    def add_match_player(self, match_id: int, player_id: int) -> dict:
        return self._request("POST", "/match_players", json={"match_id": match_id, "player_id": player_id})

    def clear_match_players(self, match_id: int) -> None:
        self._request("DELETE", f"/match_players/{match_id}")

    def remove_match_player(self, match_id: int, player_id: int) -> None:
        self._request("DELETE", f"/match_players/{match_id}/{player_id}")
