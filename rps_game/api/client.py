"""
对局服务客户端
Game API Client
"""
import json
import urllib.error
import urllib.request
from typing import Any, Dict, List, Optional
from ..utils.exceptions import GameApiError, TransportFailure
from ..utils.logger import setup_logger

logger = setup_logger("RPS.ApiClient")

CONNECTION_ERROR_MESSAGE = (
    "Unable to connect to the game server. Please check your connection and try again."
)


class GameApiClient:
    """对局服务客户端类"""

    def __init__(self, base_url: str = "http://localhost:3001/api", timeout: float = 5.0):
        """
        Args:
            base_url: 服务地址（包含 /api 前缀）
            timeout: 单次请求超时（秒）
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _request(self, endpoint: str, method: str = "GET",
                 body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        data = json.dumps(body).encode('utf-8') if body is not None else None
        req = urllib.request.Request(
            url, data=data, method=method,
            headers={'Content-Type': 'application/json'}
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return json.loads(response.read().decode('utf-8'))
        except urllib.error.HTTPError as e:
            try:
                error_data = json.loads(e.read().decode('utf-8'))
            except (ValueError, UnicodeDecodeError):
                error_data = None
            message = (error_data or {}).get('error') if isinstance(error_data, dict) else None
            raise GameApiError(message or f"HTTP {e.code}: {e.reason}",
                               status=e.code, data=error_data) from e
        except (urllib.error.URLError, TimeoutError, ConnectionError) as e:
            logger.warning(f"无法连接对局服务 {url}: {e}")
            raise TransportFailure(CONNECTION_ERROR_MESSAGE, url=url) from e
        except ValueError as e:
            raise GameApiError("An unexpected error occurred while communicating with the server.") from e

    def play_game(self, player_choice: str,
                  history: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        请求服务端进行一局

        Args:
            player_choice: 玩家出拳
            history: 玩家之前的出拳（最新在前），供服务端克制策略使用

        Returns:
            Dict[str, Any]: {playerChoice, computerChoice, result, timestamp}
        """
        if not player_choice or not isinstance(player_choice, str):
            raise GameApiError("Player choice is required and must be a string.")
        body: Dict[str, Any] = {'choice': player_choice.lower()}
        if history is not None:
            body['history'] = list(history)
        return self._request('/game/play', method='POST', body=body)

    def get_valid_choices(self) -> Dict[str, Any]:
        return self._request('/game/choices')

    def check_health(self) -> Dict[str, Any]:
        return self._request('/health')

    def is_connected(self) -> bool:
        """健康检查是否成功"""
        try:
            self.check_health()
        except (TransportFailure, GameApiError):
            return False
        return True
