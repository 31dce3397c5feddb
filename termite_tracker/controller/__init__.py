from .app_controller import AnnotationController, PointerTracker, TickInput, TickReport

__all__ = ["AnnotationController", "PointerTracker", "TickInput", "TickReport"]
