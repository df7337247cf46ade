from .so3_group_element import SO3Element, skew

__all__ = ["SO3Element", "skew"]
