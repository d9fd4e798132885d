"""FastAPI routers acting as controllers in the MVC architecture."""

from . import analyze, sonification, tts

__all__ = ["analyze", "sonification", "tts"]
