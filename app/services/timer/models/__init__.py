from .countdown_state import CountdownSnapshot

__all__ = ["CountdownSnapshot"]
