"""
对局HTTP服务
Game HTTP Server - 出拳、合法出拳列表与健康检查
"""
from datetime import datetime
from typing import Any, Dict, Optional
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from ..game.game_logic import Choice, GameRules
from ..game.game_logic.choice_source import SeededRandomSource
from ..game.opponent import ComputerPlayer, OpponentConfig, get_available_strategies
from ..utils.config_loader import ConfigLoader, DEFAULT_CONFIG
from ..utils.error_handler import global_error_handler
from ..utils.exceptions import InvalidChoice, InvalidConfiguration
from ..utils.logger import setup_logger

logger = setup_logger("RPS.Server")

SERVICE_NAME = "rock-paper-scissors-backend"
INVALID_CHOICE_MESSAGE = "Invalid choice. Must be rock, paper, or scissors."


def build_opponent_config(opponent_section: Dict[str, Any]) -> OpponentConfig:
    """从 opponent 配置节创建对手配置（seed 用于随机来源，不属于对手配置）"""
    return OpponentConfig.from_dict({
        key: value for key, value in opponent_section.items() if key != 'seed'
    })


def create_app(config: Optional[Dict[str, Any]] = None,
               computer_player: Optional[ComputerPlayer] = None) -> Flask:
    """
    创建 Flask 应用

    Args:
        config: 完整配置字典，None 表示默认配置
        computer_player: 电脑对手，None 时按配置创建

    Returns:
        Flask: 应用实例
    """
    config = config if config is not None else ConfigLoader.merge(DEFAULT_CONFIG, {})
    opponent_section = ConfigLoader.get_opponent_config(config)
    server_config = ConfigLoader.get_server_config(config)

    base_opponent = build_opponent_config(opponent_section)
    player = computer_player or ComputerPlayer(SeededRandomSource(opponent_section.get('seed')))

    app = Flask(__name__)
    app.config['RPS_CONFIG'] = config

    @app.after_request
    def add_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        frontend_url = server_config.get('frontend_url')
        if frontend_url:
            response.headers['Access-Control-Allow-Origin'] = frontend_url
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
            response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        return response

    @app.route("/api/game/play", methods=["POST"])
    def api_play():
        data = request.get_json(silent=True) or {}
        token = data.get('choice') if isinstance(data, dict) else None

        try:
            player_choice = Choice.from_string(token)
        except InvalidChoice as e:
            global_error_handler.handle(e, "/api/game/play")
            return jsonify({"error": INVALID_CHOICE_MESSAGE}), 400

        history = data.get('history', [])
        try:
            opponent_config = base_opponent.with_history(history)
        except InvalidConfiguration as e:
            global_error_handler.handle(e, "/api/game/play")
            return jsonify({"error": e.message}), 400

        computer_choice = player.choose_move(opponent_config)
        result = GameRules.judge(player_choice, computer_choice)
        logger.info(f"对局: {player_choice} vs {computer_choice} -> {result}")

        return jsonify({
            "playerChoice": player_choice.value,
            "computerChoice": computer_choice.value,
            "result": result.value,
            "timestamp": datetime.now().isoformat()
        })

    @app.route("/api/game/choices")
    def api_choices():
        return jsonify({"choices": Choice.values()})

    @app.route("/api/game/strategies")
    def api_strategies():
        return jsonify({"strategies": get_available_strategies()})

    @app.route("/api/health")
    def api_health():
        return jsonify({
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "service": SERVICE_NAME
        })

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.description}), error.code
        logger.error(f"请求处理异常: {error}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500

    logger.info(f"HTTP 服务已创建，对手策略: {base_opponent.strategy}, 难度: {base_opponent.difficulty}")
    return app
