"""Expose Qt models used by the GUI."""

from .navigator_item_model import NavigatorItemModel
from .roles import Roles

__all__ = [
    "NavigatorItemModel",
    "Roles",
]
