from weather_bot.chat.handler import TurnHandler

__all__ = ["TurnHandler"]
