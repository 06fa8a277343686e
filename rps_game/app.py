"""
应用程序主类
Application Main Class
"""
import signal
from typing import Callable, Optional
from .api import create_app, GameApiClient
from .game import GameSession
from .game.game_logic.choice_source import SeededRandomSource
from .game.opponent import ComputerPlayer, LocalOpponentProvider, RemoteOpponentProvider
from .api.server import build_opponent_config
from .storage import StorageFactory
from .utils.logger import setup_logger, setup_logger_from_config
from .utils.config_loader import ConfigLoader
from .utils.error_handler import global_error_handler
from .utils.exceptions import (
    ConfigurationException, GameApiError, GameException, InvalidChoice, TransportFailure
)

logger = setup_logger("RPS.App")

CONSOLE_HELP = "输入 rock / paper / scissors 出拳，reset 清除本回合，reset-all 全部重置，" \
               "stats 查看统计，history 查看历史，quit 退出"


class Application:
    """应用程序主类"""

    def __init__(self, config_path: Optional[str] = None, remote_url: Optional[str] = None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径，None 表示使用默认路径
            remote_url: 对局服务地址，提供时控制台模式使用远程对手
        """
        self.config_path = config_path
        self.remote_url = remote_url
        self.config: dict = {}
        self.session: Optional[GameSession] = None
        self.should_exit = False

    def _signal_handler(self, signum, frame):
        """信号处理函数"""
        logger.info(f"收到信号 {signum}，准备退出")
        self.should_exit = True

    def initialize(self) -> bool:
        """
        加载配置并设置日志

        Returns:
            bool: 初始化是否成功
        """
        try:
            self.config = ConfigLoader.load_with_defaults(self.config_path)
            setup_logger_from_config(ConfigLoader.get_logging_config(self.config), "RPS.App")
            ConfigLoader.get_game_config(self.config)
            ConfigLoader.get_server_config(self.config)
            return True
        except ConfigurationException as e:
            global_error_handler.handle(e, "加载配置")
            return False
        except Exception as e:
            logger.error(f"初始化失败: {e}", exc_info=True)
            return False

    def create_session(self) -> GameSession:
        """按配置创建游戏会话"""
        game_config = ConfigLoader.get_game_config(self.config)
        storage = StorageFactory.create_from_config(ConfigLoader.get_storage_config(self.config))
        logger.info(f"存储状态: {storage.get_status()}")

        if self.remote_url:
            server_config = ConfigLoader.get_server_config(self.config)
            client = GameApiClient(self.remote_url, timeout=server_config.get('timeout', 5.0))
            opponent = RemoteOpponentProvider(client)
            logger.info(f"使用远程对手: {self.remote_url}")
        else:
            opponent_section = ConfigLoader.get_opponent_config(self.config)
            opponent = LocalOpponentProvider(
                ComputerPlayer(SeededRandomSource(opponent_section.get('seed'))),
                build_opponent_config(opponent_section)
            )

        return GameSession(opponent, storage=storage,
                           history_limit=game_config.get('history_limit', 50))

    def run_server(self) -> bool:
        """启动HTTP服务（阻塞）"""
        server_config = ConfigLoader.get_server_config(self.config)
        app = create_app(self.config)
        host = server_config.get('host', '127.0.0.1')
        port = server_config.get('port', 3001)
        logger.info(f"HTTP 服务启动: http://{host}:{port}")
        app.run(host=host, port=port)
        return True

    def run_console(self, read_line: Callable[[str], str] = input,
                    write: Callable[[str], None] = print) -> bool:
        """
        运行控制台对局循环

        Args:
            read_line: 读取一行输入的函数
            write: 输出函数

        Returns:
            bool: 是否正常退出
        """
        if self.session is None:
            self.session = self.create_session()
        write(CONSOLE_HELP)

        while not self.should_exit:
            try:
                line = read_line("> ").strip().lower()
            except EOFError:
                break

            if not line:
                continue
            if line in ("quit", "exit", "q"):
                break
            self.handle_command(line, write)

        self.session.flush()
        logger.info("控制台对局结束")
        return True

    def handle_command(self, line: str, write: Callable[[str], None] = print):
        """处理一条控制台命令"""
        session = self.session
        if line == "reset":
            session.reset_round()
            write("本回合已清除")
        elif line == "reset-all":
            session.reset_all()
            write("比分、历史和统计已全部重置")
        elif line == "stats":
            stats = session.get_stats()
            favorite = stats.favorite_choice.value if stats.favorite_choice else "-"
            write(f"共 {stats.total_games} 局: 胜 {stats.wins} / 负 {stats.losses} / 平 {stats.ties}, "
                  f"胜率 {session.get_win_percentage()}%, 最长连胜 {stats.max_win_streak}, "
                  f"最长连败 {stats.max_loss_streak}, 最常出 {favorite}")
        elif line == "history":
            for item in session.get_recent_games():
                write(f"#{item.round_id} {item.player_choice} vs {item.computer_choice}: {item.result}")
        else:
            try:
                round_result = session.play_round(line)
            except InvalidChoice as e:
                write(e.message)
                return
            except (TransportFailure, GameApiError, GameException) as e:
                global_error_handler.handle(e, "控制台出拳")
                write(e.message)
                return

            if round_result is None:
                return
            score = session.get_score()
            write(f"你出 {round_result.player_choice}, 电脑出 {round_result.computer_choice}: "
                  f"{round_result.result}  (比分 {score.player_score}:{score.computer_score})")

        for warning in session.pop_storage_warnings():
            write(f"警告: 保存失败，本地进度仍然有效 ({warning.message})")

    def start(self, mode: str = "server") -> bool:
        """
        启动应用程序

        Args:
            mode: server 或 console

        Returns:
            bool: 是否成功
        """
        if not self.initialize():
            return False

        signal.signal(signal.SIGTERM, self._signal_handler)

        if mode == "console":
            return self.run_console()
        return self.run_server()
