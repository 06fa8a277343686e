"""
石头剪刀布主程序入口
Rock Paper Scissors Main Entry
"""
import sys
import argparse

from rps_game.app import Application
from rps_game.utils.logger import setup_logger

logger = setup_logger("RPS.Main")


def parse_args(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(description='石头剪刀布')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )
    parser.add_argument(
        '--mode',
        choices=['server', 'console'],
        default='server',
        help='运行模式: server 启动HTTP服务, console 在终端对局'
    )
    parser.add_argument(
        '--remote',
        type=str,
        default=None,
        help='控制台模式下使用的对局服务地址，如 http://localhost:3001/api'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """主函数"""
    args = parse_args(argv)

    logger.info("石头剪刀布启动 / Rock Paper Scissors Starting")

    app = Application(config_path=args.config, remote_url=args.remote)

    try:
        success = app.start(mode=args.mode)
        if not success:
            logger.error("应用程序启动失败")
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("用户中断程序")
    except Exception as e:
        logger.error(f"程序异常退出: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("程序退出")


if __name__ == "__main__":
    main()
