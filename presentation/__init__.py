"""Toolkit-neutral presentation adapter for the round engine."""

from presentation.engine_adapter import EngineAdapter, TableView, UICardInfo, card_image_filename

__all__ = [
    "EngineAdapter",
    "TableView",
    "UICardInfo",
    "card_image_filename",
]
