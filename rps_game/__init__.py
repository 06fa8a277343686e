"""
石头剪刀布对局核心
Rock Paper Scissors Game Core
"""
__version__ = "1.0.0"
